# QuoteShield scoring and pricing models
