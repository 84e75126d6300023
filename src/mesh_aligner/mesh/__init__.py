from .obj_loader import MeshGroup, ObjParseError, load_obj, parse_obj  # noqa: F401
