# billy_bingo/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Typed application errors and their HTTP rendering
- security: Password hashing and JWT tokens
- validation: Input rules for users and bingo cards
"""
