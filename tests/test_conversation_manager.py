"""
Tests for conversation context tracking.
"""

import threading

from chatbot_engine.models import IntentResult

GREETING = IntentResult(intent="greeting", confidence=0.9)


class TestConversationManager:
    """Test ConversationManager and ConversationContext."""

    def test_same_id_same_context(self, manager):
        assert manager.get_context("a") is manager.get_context("a")

    def test_distinct_ids_distinct_contexts(self, manager):
        assert manager.get_context("a") is not manager.get_context("b")

    def test_new_context_state(self, manager):
        context = manager.get_context("fresh")
        assert context.interaction_count == 0
        assert context.is_first_interaction()
        assert not context.is_ended
        assert context.get_history() == []

    def test_first_and_second_update(self, manager):
        context = manager.update_context("s1", "hello", "Hi!", GREETING)
        assert context.is_first_interaction()
        assert manager.get_total_conversations() == 1

        manager.update_context("s1", "again", "Hi again!", GREETING)
        assert not context.is_first_interaction()
        assert manager.get_total_conversations() == 1

    def test_update_records_history_and_context_values(self, manager):
        context = manager.update_context("s1", "hello", "Hi!", GREETING)

        assert context.get_history() == ["User: hello", "Bot: Hi!"]
        assert context.get_context_value("lastIntent") == "greeting"
        assert context.get_context_value("lastUserInput") == "hello"
        assert context.get_context_value("lastBotResponse") == "Hi!"
        assert context.last_interaction >= context.start_time

    def test_context_values_can_be_set(self, manager):
        context = manager.get_context("s1")
        context.set_context_value("topic", "python")
        assert context.get_context_data() == {"topic": "python"}

    def test_ended_flag(self, manager):
        context = manager.get_context("s1")
        context.set_ended(True)
        assert context.is_ended

    def test_average_conversation_length(self, manager):
        assert manager.get_average_conversation_length() == 0.0

        manager.update_context("a", "one", "1", GREETING)
        manager.update_context("a", "two", "2", GREETING)
        manager.update_context("b", "one", "1", GREETING)

        # 4 history lines and 2 history lines
        assert manager.get_average_conversation_length() == 3.0

    def test_average_ignores_sessions_without_exchanges(self, manager):
        manager.get_context("idle")
        assert manager.get_average_conversation_length() == 0.0

        manager.update_context("busy", "one", "1", GREETING)
        assert manager.get_average_conversation_length() == 2.0

    def test_remove_context(self, manager):
        manager.get_context("gone")
        assert manager.remove_context("gone")
        assert not manager.remove_context("gone")
        assert manager.find_context("gone") is None
        assert manager.session_ids() == []

    def test_summary(self, manager):
        manager.update_context("s1", "hello", "Hi!", GREETING)
        summary = manager.get_context("s1").summary()

        assert summary.session_id == "s1"
        assert summary.interaction_count == 1
        assert summary.history == ["User: hello", "Bot: Hi!"]

    def test_concurrent_first_access_creates_one_context(self, manager):
        barrier = threading.Barrier(16)
        seen = []

        def access():
            barrier.wait()
            seen.append(manager.get_context("shared"))

        threads = [threading.Thread(target=access) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len({id(context) for context in seen}) == 1

    def test_concurrent_updates_are_serialized(self, manager):
        def update():
            for i in range(25):
                manager.update_context("shared", f"msg {i}", "ok", GREETING)

        threads = [threading.Thread(target=update) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        context = manager.get_context("shared")
        assert context.interaction_count == 200
        assert len(context.get_history()) == 400
        assert manager.get_total_conversations() == 1
