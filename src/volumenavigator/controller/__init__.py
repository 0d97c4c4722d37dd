"""
The CONTROLLER layer turns pointer input and API calls into plane mutations.
It talks to the rendering layer only through the `ViewCollaborator` protocol
and never imports PyVista.
"""
