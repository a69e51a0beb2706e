"""
Converter implementations backed by external codec libraries.
"""
