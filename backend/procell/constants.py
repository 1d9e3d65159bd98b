"""
Application-wide constants.

Defaults here are used when no explicit configuration is supplied.
"""

# In-process tier and composed helper default TTL (5 minutes)
DEFAULT_MEMORY_TTL_MS = 5 * 60 * 1000

# Durable tier default TTL (24 hours)
DEFAULT_DURABLE_TTL_MS = 24 * 60 * 60 * 1000

# Namespace for keys written to the durable store
DEFAULT_DURABLE_PREFIX = "procell_"

# Eager eviction interval for the in-process tier
DEFAULT_SWEEP_INTERVAL_SECONDS = 5 * 60

# Upper bound accepted for any TTL (1 year)
MAX_TTL_MS = 365 * 24 * 60 * 60 * 1000
