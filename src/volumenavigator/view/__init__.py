"""
The VIEW layer renders the navigator with PyVista inside Qt and provides the
`ViewCollaborator` capabilities (projection, picking, camera) to the controller.
"""
