"""
Breakfast Blitz Package
=======================

Match-resolution engine for the Breakfast Blitz match-3 game:

- Board generation and gravity/refill
- Run detection and cascades
- Power-up effects
- Session state and win/loss rules
- Level catalog and completion rewards

All tunable parameters are in game_config.yaml.
"""
