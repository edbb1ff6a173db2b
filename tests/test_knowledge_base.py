"""
Tests for the knowledge base and its store.
"""

import threading

from chatbot_engine.knowledge_base import (
    GENERIC_RESPONSES,
    TECHNICAL_RESPONSES,
    KnowledgeBase,
    KnowledgeStore,
)
from chatbot_engine.models import FAQItem


class TestKnowledgeBase:
    """Test KnowledgeBase lookups and inserts."""

    def test_technical_lookup_is_case_insensitive(self, knowledge_base):
        assert knowledge_base.get_technical_response("JAVA") == TECHNICAL_RESPONSES["java"]
        assert knowledge_base.get_topic_response("Machine Learning") == TECHNICAL_RESPONSES["machine learning"]

    def test_missing_keys(self, knowledge_base):
        assert knowledge_base.get_topic_response("weather") is None
        assert knowledge_base.get_response("nonexistent") is None

    def test_generic_response(self, knowledge_base):
        assert knowledge_base.get_response("praise") == GENERIC_RESPONSES["praise"]

    def test_seeded_knowledge_count(self, knowledge_base):
        assert knowledge_base.get_knowledge_count() == len(TECHNICAL_RESPONSES) + len(GENERIC_RESPONSES)

    def test_similar_response_exact_key(self, knowledge_base):
        assert knowledge_base.find_similar_response("machine learning") == TECHNICAL_RESPONSES["machine learning"]

    def test_similar_response_question(self, knowledge_base):
        assert knowledge_base.find_similar_response("What is Java?") == TECHNICAL_RESPONSES["java"]

    def test_similar_response_below_threshold(self, knowledge_base):
        # 1 shared word out of 4
        assert knowledge_base.find_similar_response("tell me about java") is None
        assert knowledge_base.find_similar_response("asdkjasd") is None

    def test_similarity_equal_to_threshold_is_rejected(self):
        kb = KnowledgeBase(seed=False)
        kb.add_technical_response("alpha beta gamma", "greek")

        assert kb.find_similar_response("alpha beta gamma d e f g h i j") is None
        assert kb.find_similar_response("alpha beta gamma d e f g h i") == "greek"

    def test_add_knowledge(self, knowledge_base):
        before = knowledge_base.get_knowledge_count()
        knowledge_base.add_knowledge("What are your hours", "We are open 9 to 5.", "Support")

        assert knowledge_base.get_response("what are your hours") == "We are open 9 to 5."
        assert knowledge_base.get_category_responses("support") == ["We are open 9 to 5."]
        assert knowledge_base.get_knowledge_count() == before + 1

    def test_add_knowledge_same_question_overwrites(self, knowledge_base):
        before = knowledge_base.get_knowledge_count()
        knowledge_base.add_knowledge("Office hours", "9 to 5", "support")
        knowledge_base.add_knowledge("office hours", "9 to 5", "support")
        knowledge_base.add_knowledge("OFFICE HOURS", "10 to 6", "support")

        assert knowledge_base.get_knowledge_count() == before + 1
        assert knowledge_base.get_response("office hours") == "10 to 6"
        assert knowledge_base.get_category_responses("support") == ["10 to 6"]

    def test_category_keeps_distinct_questions_with_same_answer(self, knowledge_base):
        knowledge_base.add_knowledge("Do you ship abroad", "Yes.", "shipping")
        knowledge_base.add_knowledge("Do you ship on weekends", "Yes.", "shipping")

        assert knowledge_base.get_category_responses("shipping") == ["Yes.", "Yes."]

    def test_load_faqs(self, knowledge_base, faq_items):
        loaded = knowledge_base.load_faqs(faq_items)

        assert loaded == 2
        assert knowledge_base.get_faqs() == faq_items
        assert knowledge_base.get_response("explain the refund policy") == "Refunds are available within 30 days."

    def test_injected_store_is_shared(self):
        store = KnowledgeStore()
        first = KnowledgeBase(store=store)
        second = KnowledgeBase(store=store, seed=False)

        first.add_knowledge("ping", "pong", "misc")
        assert second.get_response("ping") == "pong"

    def test_separate_instances_are_isolated(self):
        first = KnowledgeBase()
        second = KnowledgeBase()

        first.add_knowledge("ping", "pong", "misc")
        assert second.get_response("ping") is None

    def test_concurrent_inserts(self):
        kb = KnowledgeBase(seed=False)

        def insert(worker):
            for i in range(50):
                kb.add_knowledge(f"question {worker} {i}", "answer", f"category {worker}")

        threads = [threading.Thread(target=insert, args=(w,)) for w in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert kb.get_knowledge_count() == 400
