from fiberlens.differ.tree_diff import compare_values, diff_trees, format_value

__all__ = ["compare_values", "diff_trees", "format_value"]
