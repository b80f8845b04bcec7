"""
Test suite for Taskboard.

- unit/: models, input parsing, tokens, configuration and the CLI
- integration/: the REST API through the Flask test client
- security/: per-user task isolation
- client/: the client package, with a fake HTTP session and end to end
"""
