"""Battle domain services: prompts, opponent, judge, lifecycle and leaderboard.

Nothing in this package touches Flask request objects. Routes and socket
handlers call into these services, which talk to storage through a
RecordStore and to OpenAI through the helpers in ``generation``.
"""
