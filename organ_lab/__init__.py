"""
Organ Lab
=========

Educational matching puzzle: each cavity must receive its one correct
organ, picked from near-identical variants of three organ families.

The ``placement_core`` package holds the rules engine and round state
machine. Rendering and input live outside it and only consume the
controller's render data and signals.

Tunable parameters are in game_config.yaml.
"""
