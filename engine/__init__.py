"""engine

Session orchestration over the pure core: one decision = snapshot, effects,
six months of time, scenario rules, badges.
"""
