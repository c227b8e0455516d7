import copy
import io
import random
import unittest

from rich.console import Console

from roomcrawl.core.actions import Command, CommandKind, apply_command, build_actions
from roomcrawl.core.conditions import satisfied
from roomcrawl.core.errors import ConfigurationError
from roomcrawl.core.loader import build_game
from roomcrawl.core.models import Condition, Outcome, Player, Resource, Room, RoomKind
from roomcrawl.core.engine import Game, parse_choice
from roomcrawl.core.strategies import Inventory, MainAction, TurnStrategy, UncompletedCondition
from roomcrawl.core.terminal import Terminal


VAULT_WORLD = {
    "start_room": "hall",
    "resources": [{"id": "key", "name": "Key"}],
    "rooms": [
        {
            "id": "hall",
            "name": "Hall",
            "type": "normal",
            "description": "A long hall.",
            "resources": ["key"],
            "connections": [
                {
                    "roomId": "vault",
                    "name": "Vault",
                    "condition": {"type": "has", "resourceId": "key", "description": "The vault is locked."},
                }
            ],
        },
        {"id": "vault", "name": "Vault", "type": "winning", "description": "Gold everywhere."},
    ],
}

CAVE_WORLD = {
    "start_room": "camp",
    "resources": [{"id": "torch", "name": "Torch"}, {"id": "rope", "name": "Rope"}],
    "rooms": [
        {
            "id": "camp",
            "name": "Camp",
            "type": "normal",
            "resources": ["torch", "rope"],
            "connections": [{"roomId": "cave", "name": "Cave"}, {"roomId": "cliff", "name": "Cliff"}],
        },
        {
            "id": "cave",
            "name": "Cave",
            "type": "normal",
            "connections": [{"roomId": "camp", "name": "Camp"}],
        },
        {"id": "cliff", "name": "Cliff", "type": "death", "description": "You fall."},
    ],
}


def make_terminal(inputs=()):
    buf = io.StringIO()
    it = iter(inputs)

    def _input(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return Terminal(Console(file=buf, width=120), input_func=_input), buf


def make_game(world=VAULT_WORLD, inputs=()):
    terminal, buf = make_terminal(inputs)
    return build_game(copy.deepcopy(world), "Ann", terminal), buf


class ScenarioTests(unittest.TestCase):
    def test_pick_up_key_then_enter_vault(self):
        game, buf = make_game(inputs=["2", "2"])
        outcome = game.start()

        self.assertFalse(game.running)
        self.assertEqual(outcome, Outcome.WON)
        self.assertEqual(game.player.inventory, ["key"])
        self.assertEqual(game.rooms["hall"].resources, [])
        self.assertEqual(game.active_room_id, "vault")
        self.assertIn("you won", buf.getvalue())
        self.assertEqual(game.turns, 2)

    def test_locked_vault_without_key(self):
        game, buf = make_game(inputs=["3"])
        game.strategy.execute(game)

        self.assertEqual(game.strategy, UncompletedCondition(game.rooms["hall"].connections[0].condition))
        self.assertEqual(game.active_room_id, "hall")
        self.assertTrue(game.running)

        game.strategy.execute(game)  # input exhausted
        self.assertIn("The vault is locked.", buf.getvalue())
        self.assertIn("You need to have", buf.getvalue())

    def test_uncompleted_condition_offers_only_back_and_quit(self):
        game, _ = make_game(inputs=["3", "1"])
        game.strategy.execute(game)
        game.strategy.execute(game)

        self.assertEqual([a.command.kind for a in game.actions], [CommandKind.BACK, CommandKind.QUIT])
        self.assertEqual(game.strategy, MainAction())
        self.assertTrue(game.running)

    def test_quit_ends_game(self):
        game, buf = make_game(inputs=["5"])
        self.assertEqual(game.start(), Outcome.QUIT)
        self.assertFalse(game.running)
        self.assertIn("Game over", buf.getvalue())

    def test_end_of_input_quits(self):
        game, _ = make_game(inputs=[])
        self.assertEqual(game.start(), Outcome.QUIT)
        self.assertEqual(game.turns, 0)


class EngineTests(unittest.TestCase):
    def test_graph_targets_resolve(self):
        game, _ = make_game(CAVE_WORLD)
        for room in game.rooms.values():
            for connection in room.connections:
                self.assertIn(connection.room_id, game.rooms)

    def test_death_room_ends_game_without_menu(self):
        world = copy.deepcopy(CAVE_WORLD)
        terminal, buf = make_terminal()
        terminal._input = lambda prompt: self.fail("no choice should be read")
        game = build_game(world, "Ann", terminal, start_room="cliff")

        game.strategy.execute(game)

        self.assertFalse(game.running)
        self.assertEqual(game.outcome, Outcome.LOST)
        self.assertEqual(game.actions, [])
        self.assertIn("You lost", buf.getvalue())

    def test_invalid_choices_are_no_ops(self):
        for raw in ["0", "8", "abc", "", "-1"]:
            with self.subTest(raw=raw):
                game, buf = make_game(CAVE_WORLD, inputs=[raw])
                # Camp: inventory, take torch, take rope, cave, cliff, hint, quit
                game.strategy.execute(game)
                self.assertEqual(len(game.actions), 7)
                self.assertEqual(game.active_room_id, "camp")
                self.assertEqual(game.player.inventory, [])
                self.assertEqual(game.strategy, MainAction())
                self.assertTrue(game.running)
                self.assertEqual(game.turns, 0)
                self.assertIn("Invalid choice.", buf.getvalue())

    def test_handle_choice_bounds(self):
        game, _ = make_game(CAVE_WORLD)
        game.refresh_actions()
        self.assertFalse(game.handle_choice(0))
        self.assertFalse(game.handle_choice(len(game.actions) + 1))
        self.assertTrue(game.handle_choice(1))
        self.assertEqual(game.strategy, Inventory())

    def test_parse_choice(self):
        self.assertEqual(parse_choice(" 3\n"), 3)
        self.assertIsNone(parse_choice("three"))
        self.assertIsNone(parse_choice(None))

    def test_drop_goes_to_current_room(self):
        game, _ = make_game(CAVE_WORLD)
        apply_command(game, Command(CommandKind.PICK_UP, resource_id="torch"))
        apply_command(game, Command(CommandKind.TRAVERSE, connection=game.active_room.connections[0]))
        self.assertEqual(game.active_room_id, "cave")

        apply_command(game, Command(CommandKind.DROP, resource_id="torch"))
        self.assertEqual(game.rooms["cave"].resources, ["torch"])
        self.assertEqual(game.rooms["camp"].resources, ["rope"])
        self.assertEqual(game.player.inventory, [])

    def test_inventory_round_trip(self):
        game, _ = make_game(CAVE_WORLD, inputs=["2", "1", "1", "1"])
        game.strategy.execute(game)  # take torch
        game.strategy.execute(game)  # open inventory
        self.assertEqual(game.strategy, Inventory())
        game.strategy.execute(game)  # drop torch
        self.assertEqual(game.player.inventory, [])
        self.assertEqual(game.rooms["camp"].resources, ["rope", "torch"])
        game.strategy.execute(game)  # back
        self.assertEqual(game.strategy, MainAction())

    def test_inventory_conservation(self):
        rng = random.Random(7)
        game, _ = make_game(CAVE_WORLD)
        for _ in range(300):
            choice = rng.choice(["pick", "drop", "move"])
            if choice == "pick" and game.active_room.resources:
                apply_command(game, Command(CommandKind.PICK_UP, resource_id=rng.choice(game.active_room.resources)))
            elif choice == "drop" and game.player.inventory:
                apply_command(game, Command(CommandKind.DROP, resource_id=rng.choice(game.player.inventory)))
            elif choice == "move":
                safe = [c for c in game.active_room.connections if c.room_id != "cliff"]
                apply_command(game, Command(CommandKind.TRAVERSE, connection=rng.choice(safe)))

            for resource_id in ("torch", "rope"):
                places = game.player.inventory.count(resource_id)
                places += sum(room.resources.count(resource_id) for room in game.rooms.values())
                self.assertEqual(places, 1)

    def test_toggle_hint_shows_table(self):
        world = copy.deepcopy(VAULT_WORLD)
        world["hints"] = ["Win: take the key first"]
        terminal, buf = make_terminal(["4"])
        game = build_game(world, "Ann", terminal)
        game.strategy.execute(game)
        self.assertTrue(game.show_hints)

        game.refresh_actions()
        self.assertEqual(game.actions[3].label, "Hide hint")
        terminal._input = lambda prompt: "5"
        game.strategy.execute(game)
        self.assertIn("Win: take the key first", buf.getvalue())

    def test_independent_games(self):
        first, _ = make_game()
        second, _ = make_game()
        apply_command(first, Command(CommandKind.PICK_UP, resource_id="key"))
        self.assertEqual(first.player.inventory, ["key"])
        self.assertEqual(second.player.inventory, [])
        self.assertEqual(second.rooms["hall"].resources, ["key"])

    def test_resource_placed_twice_rejected(self):
        world = copy.deepcopy(CAVE_WORLD)
        world["rooms"][1]["resources"] = ["torch"]
        terminal, _ = make_terminal()
        with self.assertRaises(ConfigurationError):
            build_game(world, "Ann", terminal)

    def test_missing_start_room_rejected(self):
        terminal, _ = make_terminal()
        room = Room("a", "A", "", RoomKind.NORMAL)
        with self.assertRaises(ConfigurationError):
            Game(Player("Ann"), {"a": room}, {}, "b", terminal)


class ActionMenuTests(unittest.TestCase):
    def test_main_menu_order(self):
        game, _ = make_game(CAVE_WORLD)
        labels = [a.label for a in build_actions(game.strategy, game)]
        self.assertEqual(
            labels,
            ["Check inventory", "Take Torch", "Take Rope", "Go to Cave", "Go to Cliff", "Show hint", "Quit the game"],
        )

    def test_inventory_menu_order(self):
        game, _ = make_game(CAVE_WORLD)
        game.player.take("rope")
        game.player.take("torch")
        labels = [a.label for a in build_actions(Inventory(), game)]
        self.assertEqual(labels, ["Drop Rope", "Drop Torch", "Go back", "Quit the game"])

    def test_menu_is_stable(self):
        game, _ = make_game(CAVE_WORLD)
        for strategy in (MainAction(), Inventory(), UncompletedCondition(Condition("has", "torch", "dark"))):
            with self.subTest(strategy=strategy.kind):
                self.assertEqual(build_actions(strategy, game), build_actions(strategy, game))


class ConditionTests(unittest.TestCase):
    def test_has_resource(self):
        player = Player("Ann")
        condition = Condition("has", "key", "locked")
        self.assertFalse(satisfied(condition, player))
        player.take("key")
        self.assertTrue(satisfied(condition, player))

    def test_missing_condition_is_satisfied(self):
        self.assertTrue(satisfied(None, Player("Ann")))
        self.assertTrue(satisfied(Condition(None), Player("Ann")))

    def test_unknown_condition_kind_is_permissive(self):
        # Unknown kinds never block traversal.
        self.assertTrue(satisfied(Condition("knows", "password", "?"), Player("Ann")))

    def test_inventory_has_no_duplicates(self):
        player = Player("Ann")
        player.take("key")
        player.take("key")
        self.assertEqual(player.inventory, ["key"])


class StrategyContractTests(unittest.TestCase):
    def test_base_strategy_cannot_be_built(self):
        with self.assertRaises(TypeError):
            TurnStrategy()

    def test_resource_is_immutable(self):
        resource = Resource("key", "Key")
        with self.assertRaises(AttributeError):
            resource.name = "Other"


if __name__ == "__main__":
    unittest.main()
