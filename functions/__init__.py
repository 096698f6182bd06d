"""QuoteShield Analysis Core - Cloud Functions.

This package contains the Python analysis core for QuoteShield contractor
quote reviews.

Architecture:
- Signal Adapter: AI result (current or legacy schema) -> score inputs
- Score Engine: five category scores, overall score and rating
- Finding Classifier: severity-tagged preview findings
- Pricing Engine: roofing squares, market benchmark, pricing position
"""

__version__ = "1.0.0"
