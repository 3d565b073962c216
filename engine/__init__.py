"""
Chess bot engine package.

This package implements the bot opponent: a fixed-depth minimax search with
alpha-beta pruning over a material-only evaluation. Chess rules are never
implemented here; they come from python-chess through the RulesEngine
adapter.

Modules:
    constants — Piece values, checkmate score, and search parameters
    rules     — RulesEngine adapter over chess.Board and the board snapshot
    evaluate  — Static material evaluation from an explicit perspective
    search    — Minimax with alpha-beta, find_best_move, random bot, Bot
"""
