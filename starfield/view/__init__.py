from .view_widget import CANVAS_OBJECT_NAME, StarfieldViewWidget, attach_starfield

__all__ = ["CANVAS_OBJECT_NAME", "StarfieldViewWidget", "attach_starfield"]
