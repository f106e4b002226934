"""Core token model and transformation passes.

WHY: The core package holds the stable heart of pairmark: the token
and delimiter dataclasses and the passes that rewrite token streams.
Formatters and the CLI consume these and must not reach around them.

HOW: ir.py defines the data structures, stream.py the index-addressed
token sequence, scanner.py / balancer.py / finalizer.py the inline pair
passes, inline.py drives them, sections.py wraps headings, pipeline.py
runs everything over a document and loader.py reads upstream JSON.

RULES:
- Passes are pure functions of their inputs plus in-place stream edits
- No formatter-specific logic here
"""
