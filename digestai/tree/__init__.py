from digestai.tree.renderer import ACCESS_DENIED, TreeRenderer

__all__ = ["ACCESS_DENIED", "TreeRenderer"]
