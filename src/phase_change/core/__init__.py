"""
Conversion core: file type taxonomy, converter registry and orchestration.
"""
