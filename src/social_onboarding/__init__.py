"""
social_onboarding — register a person on a social network in one pass.

Looks the person up, opens a social account for them, authenticates,
publishes a first post and records the account id back on the person.
Each stage is a step of a Railway-Oriented pipeline: the first failure
stops the run and a single success or failure message is logged.
"""

__version__ = "0.1.0"
