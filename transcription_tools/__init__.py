"""Transcription Tools: formatting, summarization, and repair of transcripts.

WHY: Speech-to-text output arrives as timestamp-tagged lines with no
paragraphing, and long transcripts need a short excerpt for review. This
package turns raw transcript text into readable prose and budget-limited
extractive summaries.

HOW: Two independent pipelines live in ``core``: the formatting pipeline
(segment parser → gap classifier → text assembler) and the summarization
pipeline (sentence extractor → scorer → budget resolver → greedy selection
→ order restorer). ``tools`` wraps them with content resolution and audit
logging; ``server``, ``mcp_server`` and ``cli`` expose the operations.

RULES:
- Core pipelines are pure functions over their inputs
- No word is ever altered by formatting; only whitespace is inserted
- Summaries are extractive and always keep document order
"""

__version__ = "0.1.0"
