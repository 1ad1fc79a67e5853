"""Core — pure lifecycle logic for crowdfunding projects.

Invariants:
    - No module in core performs IO (no DB, no HTTP, no wall clock reads)
    - `now` arrives as an argument; the id generator is injectable by the shell
"""
