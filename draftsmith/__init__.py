"""
Draftsmith: document-grounded resume and email drafting service.

Turns a user's uploaded documents into searchable chunks and a structured
profile, then generates, compiles and repairs LaTeX resumes or email drafts.
"""

__version__ = "0.1.0"
