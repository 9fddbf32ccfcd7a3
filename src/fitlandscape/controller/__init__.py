"""
The CONTROLLER layer drives the session state through the numeric core.
It is shared by the Qt window and the headless CLI, so it must not import Qt.
"""
