"""Controllers hold app state and talk to services; views only read them."""
from gui.controllers.auth_controller import AuthController
from gui.controllers.object_controller import ObjectController

__all__ = ["AuthController", "ObjectController"]
