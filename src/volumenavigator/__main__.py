"""Command-line interface."""
from volumenavigator.main import main

if __name__ == "__main__":
    main()
