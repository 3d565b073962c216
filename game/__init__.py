"""
Game layer: everything the browser UI drives, built on the engine package.

Modules:
    constants — Modes, clock length, bot delay, room codes and piece glyphs
    clock     — Two-sided countdown clock
    session   — GameSession: position, selection, clock, mode and bot
    rooms     — In-process room-code handshake for two-player games
"""
