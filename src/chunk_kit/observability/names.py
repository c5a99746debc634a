# src/chunk_kit/observability/names.py

"""Standard metric names for chunk-kit observability.

Use these constants instead of hardcoded strings. All duration metrics are in
milliseconds by convention.
"""

# ============================================================================
# Parsing Metrics
# ============================================================================

# Duration
MARKDOWN_PARSE_DURATION = "markdown_parse_duration"


# ============================================================================
# Chunking Metrics
# ============================================================================

# Duration
CHUNKING_DURATION = "chunking_duration"

# Counters (chunks accumulate over time)
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
# Oversized leaves that had to be sliced regardless of markdown structure
CHUNKING_FORCED_SPLITS = "chunking_forced_splits"

# Gauges
CHUNKING_LARGEST_CHUNK = "chunking_largest_chunk"
