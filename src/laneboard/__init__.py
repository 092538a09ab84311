"""laneboard: hierarchical kanban boards with dense integer ordering."""

__version__ = "0.1.0"
