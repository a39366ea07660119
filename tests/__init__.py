"""
Lingobot test suite.

Running Tests:
    # Unit tests
    pytest tests/unit -v

    # Smoke tests against a running instance
    LINGOBOT_URL=http://localhost:8000 pytest tests/e2e/smoke_test_e2e.py -v

Test Coverage:
    - Session model and thread-safe session store
    - Question bank loading and validation
    - Conversation engine transitions and grading
    - Chat service orchestration and per-chat serialization
    - HTTP chat and health endpoints
    - Telegram message handler and keyboard rendering
"""
