"""core

Pure simulation domain: RNG, financial math, state, effects, badges, history.
No UI, no I/O.
"""

API_VERSION = "core-v1-20261017"
