"""State/store layer.

This package is the single source of truth for cart and like state: intents
are folded into it and every output the screen renders is derived from it.
"""
