"""Tests for leaf traversal of item trees."""
from patient_export.core.models import Questionnaire, QuestionnaireItem, iter_leaves


def node(link_id, *children):
    return QuestionnaireItem(link_id=link_id, item=list(children))


class TestIterLeaves:
    def test_excludes_parents(self):
        tree = [node("A", node("A1"), node("A2", node("A2a")))]

        leaves = [leaf.link_id for leaf in iter_leaves(tree)]

        assert leaves == ["A1", "A2a"]

    def test_preorder_across_roots(self):
        tree = [
            node("A", node("A1"), node("A2")),
            node("B"),
            node("C", node("C1", node("C1a"), node("C1b"))),
        ]

        leaves = [leaf.link_id for leaf in iter_leaves(tree)]

        assert leaves == ["A1", "A2", "B", "C1a", "C1b"]

    def test_empty_input(self):
        assert list(iter_leaves([])) == []

    def test_deep_tree_does_not_hit_recursion_limit(self):
        leaf = node("leaf")
        root = leaf
        for depth in range(10_000):
            root = node(f"group-{depth}", root)

        leaves = list(iter_leaves([root]))

        assert [item.link_id for item in leaves] == ["leaf"]


class TestQuestionnaireLeafItems:
    def test_leaf_items_follow_document_order(self):
        questionnaire = Questionnaire(
            item=[node("intro"), node("group", node("q1"), node("q2"))]
        )

        assert [item.link_id for item in questionnaire.leaf_items()] == ["intro", "q1", "q2"]
