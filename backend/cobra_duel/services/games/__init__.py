"""Game domain services: grid, movement engine, turn rules, loop and timers.

This package holds the simulation itself. Socket handlers and HTTP routes
reach it only through the lobby, keeping transport concerns separated from
core game mechanics.
"""
