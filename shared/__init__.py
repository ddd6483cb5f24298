"""
Shared static data for LiftLog.

- dictionaries/: YAML tables (taxonomy synonyms, built-in exercise catalog)
"""
