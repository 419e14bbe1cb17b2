"""Core pipelines and intermediate representation.

WHY: The core package holds the two algorithms the tools are built on,
timestamp-gap text reassembly and extractive summarization, plus the
small collaborators they need (content resolution, repair table).

HOW: ir.py defines the data structures; segments.py and assembler.py form
the formatting pipeline; sentences.py and selection.py form the
summarization pipeline; content.py and repair.py are collaborators.

RULES:
- Pipelines are pure: no I/O, no shared state between calls
- I/O lives in content.py and in the operations layer above core/
"""
