from django.test import SimpleTestCase

from jurycore.apps.core.errors import MissingRequiredField, NotFound, SelectionLimitExceeded
from jurycore.apps.selections.scopes import top_scope
from jurycore.apps.selections.services.working_set import SelectionWorkingSet


class WorkingSetTest(SimpleTestCase):
    def _ws(self, ids, limit=None):
        ws = SelectionWorkingSet.for_scope(top_scope(), ids)
        ws.limit = limit
        return ws

    def test_reorder_swaps_with_neighbor(self):
        ws = self._ws([10, 20, 30])
        self.assertTrue(ws.reorder(30, "up"))
        self.assertEqual(ws.ordered_ids(), [10, 30, 20])
        self.assertEqual([e["rank"] for e in ws.entries], [1, 2, 3])
        self.assertTrue(ws.reorder(10, "down"))
        self.assertEqual(ws.ordered_ids(), [30, 10, 20])

    def test_reorder_noop_at_boundaries(self):
        ws = self._ws([10, 20, 30])
        self.assertFalse(ws.reorder(10, "up"))
        self.assertFalse(ws.reorder(30, "down"))
        self.assertEqual(ws.ordered_ids(), [10, 20, 30])

    def test_deselect_keeps_remaining_ranks(self):
        ws = self._ws([10, 20, 30])
        ws.deselect(20)
        self.assertEqual(ws.ordered_ids(), [10, 30])
        self.assertEqual(ws.rank_of(30), 3)

    def test_reorder_after_gap_swaps_ranks(self):
        ws = self._ws([10, 20, 30])
        ws.deselect(20)
        ws.reorder(30, "up")
        self.assertEqual(ws.ordered_ids(), [30, 10])
        self.assertEqual(ws.rank_of(30), 1)
        self.assertEqual(ws.rank_of(10), 3)

    def test_add_appends_and_respects_limit(self):
        ws = self._ws([10], limit=2)
        self.assertTrue(ws.add(20))
        self.assertFalse(ws.add(20))
        with self.assertRaises(SelectionLimitExceeded):
            ws.add(30)

    def test_errors(self):
        ws = self._ws([10])
        with self.assertRaises(NotFound):
            ws.deselect(99)
        with self.assertRaises(NotFound):
            ws.reorder(99, "up")
        with self.assertRaises(MissingRequiredField):
            ws.reorder(10, "sideways")
        with self.assertRaises(MissingRequiredField):
            ws.add("abc")

    def test_session_round_trip(self):
        session = {}
        ws = self._ws([10, 20])
        ws.deselect(10)
        ws.save(session)
        loaded = SelectionWorkingSet.load(session, top_scope(), default_ids=[1, 2, 3])
        self.assertEqual(loaded.entries, [{"submissionId": 20, "rank": 2}])
        loaded.discard(session)
        fresh = SelectionWorkingSet.load(session, top_scope(), default_ids=[1, 2])
        self.assertEqual(fresh.ordered_ids(), [1, 2])
