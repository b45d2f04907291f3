"""
tree-sitter based reading of Go sources.
"""
