"""content

The static Decision Catalog: 30 decisions in 5 chapters, 3 choices each.
"""
