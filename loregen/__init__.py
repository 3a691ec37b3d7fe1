"""Lore-driven structure generation library.

Subpackages:
- loregen.common: Shared utilities (config, logging, cache, openai client)
- loregen.input: Structure file parsing (scopes, comments, leaf detection)
- loregen.output: Generation (streaming, repair, keys) and output documents
- loregen.schema: Structure-file constants and the scope data model
"""
