"""Buy-X-get-Y bundle discount function.

Evaluates a merchant's bundle configuration (classic BXGY, tiered combo,
volume breaks or frequently-bought-together complements) against a cart and
returns the discounts to apply.
"""

__version__ = "0.1.0"
