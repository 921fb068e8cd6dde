"""
Games module - Game-specific implementations.

Each game has its own subpackage with:
- Spec definition (stat schema)
- Card generation
- Match setup
"""
