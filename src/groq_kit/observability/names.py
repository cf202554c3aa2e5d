# src/groq_kit/observability/names.py

"""Standard metric names for groq-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Chat completion metrics
# ============================================================================

# Duration
CHAT_COMPLETION_DURATION = "groq_chat_completion_duration"
CHAT_STREAM_DURATION = "groq_chat_stream_duration"

# Counters
CHAT_REQUESTS_TOTAL = "groq_chat_requests_total"
CHAT_ERRORS_TOTAL = "groq_chat_errors_total"
CHAT_RETRIES_TOTAL = "groq_chat_retries_total"
CHAT_STREAM_CHUNKS_TOTAL = "groq_chat_stream_chunks_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
CHAT_TOKENS_PROMPT = "groq_chat_tokens_prompt"
CHAT_TOKENS_COMPLETION = "groq_chat_tokens_completion"
CHAT_TOKENS_TOTAL = "groq_chat_tokens_total"
