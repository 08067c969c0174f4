"""
honeylog - Bounded analytics for honeypot session logs

Retrieves a recency-biased sample of Cowrie JSON logs from blob storage
and derives aggregate statistics and attack-pattern findings from them.
"""

__version__ = "1.0.0"
