"""
Rocketman Package
=================

Core simulation, persistence and agent interface for Rocketman Dodge.

- Frame-paced session loop and state machine
- Difficulty progression and spawning
- Collision and scoring rules
- Leaderboard persistence

All tunable parameters are in game_config.yaml.
"""
