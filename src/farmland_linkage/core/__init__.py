"""
Core orchestration: exceptions, per-session state, run context and pipeline.

Submodules are imported directly (``farmland_linkage.core.session`` etc.);
nothing is re-exported here to keep imports cycle-free.
"""
