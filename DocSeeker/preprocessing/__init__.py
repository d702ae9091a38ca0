"""
Preprocessing module for turning document files into term counts.
Includes text extraction from markup, tokenization and the document model.
"""
