import unittest

from game import (
    Card,
    Session,
    Start,
    Flip,
    ResolveMismatch,
    Tick,
    SubmitName,
    Reset,
    reduce,
    can_flip,
    START,
    PLAYING,
    AWAITING_NAME,
    WON,
    LOST,
    CORRECT,
    WRONG,
    WIN,
    CELEBRATE,
    LOSS,
)


def make_cards(image_ids):
    return tuple(Card(id=i, image_id=img, image=f"/images/image-{img + 1}.png") for i, img in enumerate(image_ids))


def playing(image_ids, duration=180):
    s = Session.idle(duration)
    return reduce(s, Start(cards=make_cards(image_ids), generation=1)).session


class TestRules(unittest.TestCase):
    def test_given_idle_session_when_start_then_playing_with_fresh_counters(self):
        s = playing([0, 1, 0, 1])
        self.assertEqual(s.phase, PLAYING)
        self.assertEqual(s.moves, 0)
        self.assertEqual(s.flipped, ())
        self.assertEqual(s.time_remaining, 180)
        self.assertEqual(s.generation, 1)

    def test_given_playing_session_when_start_again_then_ignored(self):
        s = playing([0, 1, 0, 1])
        step = reduce(s, Start(cards=make_cards([1, 0, 1, 0]), generation=2))
        self.assertIs(step.session, s)

    def test_given_single_flip_when_applied_then_card_up_and_moves_unchanged(self):
        s = reduce(playing([0, 1, 0, 1]), Flip(0)).session
        self.assertTrue(s.cards[0].is_flipped)
        self.assertEqual(s.flipped, (0,))
        self.assertEqual(s.moves, 0)

    def test_given_matching_pair_when_flipped_then_matched_and_correct_signal(self):
        s = reduce(playing([0, 1, 0, 1]), Flip(0)).session
        step = reduce(s, Flip(2))
        self.assertEqual(step.signals, (CORRECT,))
        self.assertEqual(step.session.moves, 1)
        self.assertEqual(step.session.flipped, ())
        self.assertTrue(step.session.cards[0].is_matched)
        self.assertTrue(step.session.cards[2].is_matched)
        self.assertEqual(step.session.phase, PLAYING)

    def test_given_mismatch_when_flipped_then_resolving_until_resolved(self):
        s = reduce(playing([0, 1, 0, 1]), Flip(0)).session
        step = reduce(s, Flip(1))
        s = step.session
        self.assertEqual(step.signals, (WRONG,))
        self.assertTrue(s.resolving)
        self.assertEqual(s.flipped, (0, 1))
        self.assertEqual(s.moves, 1)
        # Locked while resolving
        self.assertFalse(can_flip(s, 2))
        self.assertIs(reduce(s, Flip(2)).session, s)
        # A resolution for some other pair is stale
        self.assertIs(reduce(s, ResolveMismatch((2, 3))).session, s)
        done = reduce(s, ResolveMismatch((0, 1))).session
        self.assertFalse(done.resolving)
        self.assertEqual(done.flipped, ())
        self.assertFalse(done.cards[0].is_flipped)
        self.assertFalse(done.cards[1].is_flipped)
        self.assertEqual(done.moves, 1)

    def test_given_invalid_flips_when_applied_then_session_unchanged(self):
        s = reduce(playing([0, 1, 0, 1]), Flip(0)).session
        for bad in (0, -1, 4, 99):
            self.assertIs(reduce(s, Flip(bad)).session, s)
        matched = reduce(s, Flip(2)).session
        self.assertIs(reduce(matched, Flip(2)).session, matched)
        idle = Session.idle(180)
        self.assertIs(reduce(idle, Flip(0)).session, idle)

    def test_given_last_pair_when_matched_then_awaiting_name_with_win_signals(self):
        s = playing([0, 1, 0, 1])
        for idx in (0, 2, 1):
            s = reduce(s, Flip(idx)).session
        step = reduce(s, Flip(3))
        self.assertEqual(step.signals, (CORRECT, WIN, CELEBRATE))
        self.assertEqual(step.session.phase, AWAITING_NAME)
        self.assertEqual(step.session.moves, 2)
        self.assertIs(reduce(step.session, Tick()).session, step.session)

    def test_given_ticks_when_time_runs_out_then_lost_once(self):
        s = playing([0, 1, 0, 1], duration=3)
        signals = []
        for _ in range(5):
            step = reduce(s, Tick())
            signals.extend(step.signals)
            s = step.session
        self.assertEqual(s.phase, LOST)
        self.assertEqual(s.time_remaining, 0)
        self.assertEqual(signals, [LOSS])

    def test_given_resolving_when_time_runs_out_then_lost_and_resolution_ignored(self):
        s = playing([0, 1, 0, 1], duration=1)
        s = reduce(reduce(s, Flip(0)).session, Flip(1)).session
        s = reduce(s, Tick()).session
        self.assertEqual(s.phase, LOST)
        self.assertIs(reduce(s, ResolveMismatch((0, 1))).session, s)

    def test_given_awaiting_name_when_submitting_then_entry_and_won(self):
        s = playing([0, 0], duration=180)
        for _ in range(7):
            s = reduce(s, Tick()).session
        s = reduce(reduce(s, Flip(0)).session, Flip(1)).session
        self.assertEqual(s.phase, AWAITING_NAME)
        self.assertIs(reduce(s, SubmitName("   ")).session, s)
        step = reduce(s, SubmitName("  Ana  "))
        self.assertEqual(step.session.phase, WON)
        self.assertEqual(step.entry.name, "Ana")
        self.assertEqual(step.entry.elapsed_seconds, 7)
        self.assertEqual(step.entry.moves, 1)

    def test_given_long_name_when_submitting_then_clipped_to_fifteen(self):
        s = playing([0, 0])
        s = reduce(reduce(s, Flip(0)).session, Flip(1)).session
        entry = reduce(s, SubmitName("Maximiliano Fernandez")).entry
        self.assertEqual(entry.name, "Maximiliano Fer")

    def test_given_name_outside_awaiting_name_when_submitted_then_ignored(self):
        s = playing([0, 1, 0, 1])
        step = reduce(s, SubmitName("Ana"))
        self.assertIs(step.session, s)
        self.assertIsNone(step.entry)

    def test_given_any_phase_when_reset_then_idle(self):
        s = reduce(playing([0, 1, 0, 1]), Flip(0)).session
        r = reduce(s, Reset(generation=9)).session
        self.assertEqual(r.phase, START)
        self.assertEqual(r.cards, ())
        self.assertEqual(r.generation, 9)
        self.assertEqual(r.time_remaining, 180)

    def test_given_unknown_event_when_reduced_then_type_error(self):
        with self.assertRaises(TypeError):
            reduce(Session.idle(180), object())


if __name__ == '__main__':
    unittest.main(verbosity=2)
