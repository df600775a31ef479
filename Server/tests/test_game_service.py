"""
Game service tests: session creation with overrides, command routing and
idle cleanup.
"""

import random
import unittest

from color_game.config.game_settings import GameSettings
from color_game.models.errors import InvalidColorFormat
from color_game.models.game import ActionOutcome, GenerationPolicy, TargetSource
from color_game.services.game_service import (
    GameService, get_game_service, initialize_game_service
)
from color_game.services.listeners import GameListener
from color_game.services.scheduler import ManualScheduler


class TestGameService(unittest.TestCase):

    def setUp(self):
        self.scheduler = ManualScheduler()
        seeds = iter(range(1000))
        self.service = GameService(GameSettings(), self.scheduler,
                                   lambda: random.Random(next(seeds)))

    def test_create_game_with_defaults(self):
        game_id = self.service.create_new_game()
        state = self.service.get_game_state(game_id)
        self.assertEqual(state.game_id, game_id)
        self.assertEqual(state.policy, 'similar')
        self.assertEqual(state.max_lives, 5)
        self.assertEqual(len(state.options), 6)
        self.assertIn(state.target_color, state.options)

    def test_explicit_game_id(self):
        game_id = self.service.create_new_game(game_id='abc')
        self.assertEqual(game_id, 'abc')
        self.assertIsNotNone(self.service.get_session('abc'))

    def test_overrides(self):
        game_id = self.service.create_new_game({'policy': 'CONTRASTING', 'max_lives': 2})
        session = self.service.get_session(game_id)
        self.assertEqual(session.settings.policy, GenerationPolicy.CONTRASTING)
        self.assertEqual(session.settings.effective_target_source, TargetSource.RANDOM)
        self.assertEqual(session.lives_remaining, 2)

    def test_invalid_overrides_rejected(self):
        for overrides in ({'policy': 'rainbow'}, {'max_lives': 0}, {'max_lives': '3'},
                          {'variation': 10}, {'target_source': 'moon'}):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    self.service.create_new_game(overrides)
        self.assertEqual(self.service.games, {})

    def test_unknown_game(self):
        self.assertIsNone(self.service.get_game_state('missing'))
        self.assertIsNone(self.service.submit_guess('missing', '#000000'))
        self.assertIsNone(self.service.submit_guess_by_index('missing', 0))
        self.assertIsNone(self.service.request_hint('missing'))
        self.assertIsNone(self.service.request_help('missing'))
        self.assertIsNone(self.service.request_new_game('missing'))
        self.assertFalse(self.service.set_listener('missing', GameListener()))
        self.assertFalse(self.service.delete_game('missing'))

    def test_guess_routing(self):
        game_id = self.service.create_new_game()
        session = self.service.get_session(game_id)
        index = session.options.index(session.target_color)

        result = self.service.submit_guess_by_index(game_id, index)

        self.assertEqual(result.outcome, ActionOutcome.CORRECT)
        self.assertEqual(self.service.get_game_state(game_id).score, 1)

    def test_guess_by_color_string(self):
        game_id = self.service.create_new_game()
        target = self.service.get_game_state(game_id).target_color
        result = self.service.submit_guess(game_id, target.upper().lstrip('#'))
        self.assertEqual(result.outcome, ActionOutcome.CORRECT)

    def test_bad_color_raises(self):
        game_id = self.service.create_new_game()
        with self.assertRaises(InvalidColorFormat):
            self.service.submit_guess(game_id, 'not-a-color')

    def test_out_of_range_index_is_ignored(self):
        game_id = self.service.create_new_game()
        for index in (-1, 6, 42):
            result = self.service.submit_guess_by_index(game_id, index)
            self.assertEqual(result.outcome, ActionOutcome.IGNORED)
        self.assertEqual(self.service.get_game_state(game_id).lives_remaining, 5)

    def test_assists_and_reset(self):
        game_id = self.service.create_new_game()
        self.assertEqual(self.service.request_hint(game_id).outcome, ActionOutcome.HINT)
        self.assertEqual(self.service.request_help(game_id).outcome, ActionOutcome.HELP)
        self.assertEqual(self.service.request_new_game(game_id).outcome, ActionOutcome.NEW_GAME)
        state = self.service.get_game_state(game_id)
        self.assertEqual((state.hints_remaining, state.help_remaining), (3, 3))

    def test_sessions_are_independent(self):
        first = self.service.create_new_game()
        second = self.service.create_new_game()
        self.service.request_hint(first)
        self.assertEqual(self.service.get_game_state(first).hints_remaining, 2)
        self.assertEqual(self.service.get_game_state(second).hints_remaining, 3)

    def test_delete_cancels_pending_round(self):
        game_id = self.service.create_new_game()
        session = self.service.get_session(game_id)
        session.resolve_guess(session.target_color)
        self.assertEqual(self.scheduler.pending, 1)

        self.assertTrue(self.service.delete_game(game_id))

        self.assertEqual(self.scheduler.pending, 0)
        self.assertIsNone(self.service.get_game_state(game_id))
        self.assertTrue(session.closed)

    def test_cleanup_idle_games(self):
        stale = self.service.create_new_game()
        fresh = self.service.create_new_game()
        self.service.get_session(stale).last_activity -= 3600

        result = self.service.cleanup_idle_games(1800)

        self.assertEqual(result['cleaned_count'], 1)
        self.assertEqual(result['removed_game_ids'], [stale])
        self.assertIsNone(self.service.get_session(stale))
        self.assertIsNotNone(self.service.get_session(fresh))

    def test_global_service(self):
        service = initialize_game_service(GameSettings(max_lives=3), ManualScheduler())
        self.assertIs(get_game_service(), service)
        game_id = service.create_new_game()
        self.assertEqual(service.get_game_state(game_id).max_lives, 3)


if __name__ == '__main__':
    unittest.main()
