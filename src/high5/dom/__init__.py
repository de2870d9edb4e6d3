from .factory import UNKNOWN_MARKER_PROP, materialize
from .tags import *  # noqa: F403
from .tags import VOID_TAGS, Tag, Unknown, resolve_tag
