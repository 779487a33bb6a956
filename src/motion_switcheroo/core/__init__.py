"""
Core Package.

Contains the generation pipeline:
- Structural Parser (lexer, parser, extraction)
- Rewrite Engine (rule registry and framework pass)
- Emitter (serializer, normalization, formatter)
- Generation Context and the orchestrating Engine
"""
