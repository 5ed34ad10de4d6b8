"""
Interview ingest package.

This package normalizes conversational data before any analysis happens:
- speaker/content transcripts from tables (CSV, ODS) or plain text lines,
- annotation ("code") files that label turns or time ranges,
- aggregate statistics over the word sequence of a transcript.

Everything below `interview_ingest` except `readers`, `actions` and `app` is a
pure in-memory API without file or network access.
"""
