"""
Web application package for the chess game.

Provides a FastAPI JSON API and a single-page board client for playing
against the bot, on one shared board, or through a room code.
Run with: uvicorn web.app:app
"""
