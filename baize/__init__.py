"""
Baize - Snooker Frame Scoring Engine

A deterministic rules engine for scoring a two-player snooker frame.
It provides:
- Frame state management
- Legal ball resolution (reds, colours, the colour sequence)
- Scoring, breaks and fouls
- End-of-frame detection and the respotted-black tiebreak
"""

__version__ = "0.1.0"
