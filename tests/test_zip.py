import copy
import dataclasses
import json
import tempfile
import unittest
from pathlib import Path

import numpy as np

from minigames.base import InvalidDimension, InvalidLevelConfig
from minigames.zip_path import (
    ZIP_LEVELS,
    ZipEvaluator,
    ZipGenerator,
    ZipLevelConfig,
    ZipPathValidator,
    are_adjacent,
    cell_at,
    cell_coords,
    level_score,
)
from minigames.zip_path.generator import serpentine_path
from minigames.zip_path.validator import BACKTRACKED, EXTENDED, REJECTED, UNCHANGED


class ZipLevelConfigTests(unittest.TestCase):
    def test_rejects_gaps_and_repeats(self) -> None:
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig(rows=3, cols=3, numbered_cells={0: 1, 4: 3})
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig(rows=3, cols=3, numbered_cells={0: 1, 4: 1})
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig(rows=3, cols=3, numbered_cells={0: 2, 4: 3})

    def test_rejects_out_of_grid_waypoints(self) -> None:
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig(rows=3, cols=3, numbered_cells={9: 1})
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig.from_positions(1, 3, 3, [(0, 0, 1), (3, 0, 2)])

    def test_rejects_two_numbers_on_one_cell(self) -> None:
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig.from_positions(1, 3, 3, [(0, 0, 1), (0, 0, 2)])
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig(rows=2, cols=2, numbered_cells=[(0, 1), (0, 2)])

    def test_rejects_level_without_waypoints(self) -> None:
        with self.assertRaises(InvalidLevelConfig):
            ZipLevelConfig(rows=2, cols=2, numbered_cells={})

    def test_rejects_bad_dimensions(self) -> None:
        with self.assertRaises(InvalidDimension):
            ZipLevelConfig(rows=0, cols=3, numbered_cells={0: 1})

    def test_waypoint_map_is_read_only(self) -> None:
        config = ZipLevelConfig(rows=2, cols=2, numbered_cells={0: 1, 3: 2})
        with self.assertRaises(TypeError):
            config.waypoints[1] = 3
        self.assertEqual(dict(config.waypoints), {0: 1, 3: 2})
        self.assertEqual(config.numbered_cells, ((0, 1), (3, 2)))

    def test_catalogue_levels(self) -> None:
        self.assertEqual([config.level for config in ZIP_LEVELS], list(range(1, 11)))
        for config in ZIP_LEVELS:
            self.assertEqual(config.start_cell, 0)
        self.assertEqual((ZIP_LEVELS[8].rows, ZIP_LEVELS[8].cols), (5, 6))
        self.assertEqual(ZIP_LEVELS[9].max_number, 6)
        self.assertEqual(ZIP_LEVELS[9].cell_for_number(5), cell_at(5, 2, 6))

    def test_configs_hash_and_copy_as_values(self) -> None:
        config = ZipLevelConfig(rows=2, cols=2, numbered_cells={3: 2, 0: 1}, level=4)
        same = ZipLevelConfig(rows=2, cols=2, numbered_cells=[(0, 1), (3, 2)], level=4)
        self.assertEqual(config, same)
        self.assertEqual(len({config, same}), 1)
        self.assertEqual(hash(config), hash(same))

        duplicate = copy.deepcopy(config)
        self.assertEqual(duplicate, config)
        self.assertEqual(duplicate.number_at(3), 2)
        self.assertEqual(copy.copy(config).start_cell, 0)
        self.assertEqual(
            dataclasses.asdict(config),
            {"rows": 2, "cols": 2, "numbered_cells": ((0, 1), (3, 2)), "level": 4},
        )

    def test_accepts_numpy_integers(self) -> None:
        config = ZipLevelConfig(rows=np.int64(2), cols=np.int64(3), numbered_cells={np.int64(0): np.int64(1)})
        self.assertEqual((config.rows, config.cols), (2, 3))
        self.assertEqual(config.start_cell, 0)
        hash(config)

    def test_dict_round_trip(self) -> None:
        config = ZIP_LEVELS[4]
        self.assertEqual(ZipLevelConfig.from_dict(config.to_dict()), config)


class CoordinateTests(unittest.TestCase):
    def test_cell_at_and_inverse(self) -> None:
        for rows, cols in [(1, 1), (3, 4), (6, 5)]:
            for r in range(rows):
                for c in range(cols):
                    self.assertEqual(cell_coords(cell_at(r, c, cols), cols), (r, c))

    def test_adjacency_is_edge_only(self) -> None:
        self.assertTrue(are_adjacent(0, 1, 3))
        self.assertTrue(are_adjacent(0, 3, 3))
        self.assertFalse(are_adjacent(0, 4, 3))
        self.assertFalse(are_adjacent(2, 3, 3))
        self.assertFalse(are_adjacent(0, 2, 3))


class ZipPathValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        # 3x3 with waypoints 1 at 0, 2 at the centre and 3 in the far corner
        self.diagonal = ZipPathValidator(ZipLevelConfig(rows=3, cols=3, numbered_cells={0: 1, 4: 2, 8: 3}))
        # 3x3 with 1, 2, 4 along the top row and 3 at the middle right
        self.ordered = ZipPathValidator(ZipLevelConfig(rows=3, cols=3, numbered_cells={0: 1, 1: 2, 2: 4, 5: 3}))
        self.square = ZipPathValidator(ZipLevelConfig(rows=2, cols=2, numbered_cells={0: 1, 3: 2}))

    def test_empty_path_only_accepts_waypoint_one(self) -> None:
        for cell in range(9):
            self.assertEqual(self.diagonal.can_extend([], cell), cell == 0)
        self.assertFalse(self.ordered.can_extend([], 1))

    def test_rejects_non_adjacent_even_for_next_waypoint(self) -> None:
        self.assertFalse(self.diagonal.can_extend([0], 4))
        self.assertFalse(self.diagonal.can_extend([0], 8))
        self.assertTrue(self.diagonal.can_extend([0], 1))
        self.assertTrue(self.diagonal.can_extend([0, 1], 4))

    def test_rejects_out_of_order_waypoint(self) -> None:
        self.assertEqual(self.ordered.next_required_number([0, 1]), 3)
        self.assertFalse(self.ordered.can_extend([0, 1], 2))
        self.assertTrue(self.ordered.can_extend([0, 1], 4))

    def test_rejects_cells_already_on_path(self) -> None:
        self.assertFalse(self.diagonal.can_extend([0, 1, 2], 1))

    def test_rejects_out_of_grid_candidate(self) -> None:
        self.assertFalse(self.diagonal.can_extend([0], 9))
        self.assertFalse(self.diagonal.can_extend([], -1))

    def test_next_required_number(self) -> None:
        self.assertEqual(self.diagonal.next_required_number([]), 1)
        self.assertEqual(self.diagonal.next_required_number([0, 1]), 2)
        self.assertEqual(self.diagonal.next_required_number([0, 1, 4]), 3)

    def test_backtrack_truncates_after_candidate(self) -> None:
        self.assertEqual(ZipPathValidator.backtrack([0, 1, 2, 5, 8], 2), [0, 1, 2])
        self.assertEqual(ZipPathValidator.backtrack([0, 1, 2], 2), [0, 1, 2])
        self.assertEqual(ZipPathValidator.backtrack([0, 1, 2], 7), [0, 1, 2])

    def test_backtrack_does_not_mutate_input(self) -> None:
        path = [0, 1, 2, 5]
        self.diagonal.backtrack(path, 1)
        self.assertEqual(path, [0, 1, 2, 5])

    def test_win_on_full_ordered_path(self) -> None:
        self.assertTrue(self.square.check_win([0, 1, 3, 2]))
        self.assertTrue(self.square.check_win([0, 2, 3, 1]))

    def test_no_win_without_full_coverage(self) -> None:
        self.assertFalse(self.square.check_win([0, 1, 3]))
        self.assertFalse(self.diagonal.check_win([0, 1, 4, 5, 8]))

    def test_no_win_with_broken_or_repeating_path(self) -> None:
        self.assertFalse(self.square.check_win([0, 3, 1, 2]))
        self.assertFalse(self.square.check_win([0, 1, 0, 3]))

    def test_no_win_when_waypoints_out_of_order(self) -> None:
        validator = ZipPathValidator(ZipLevelConfig(rows=1, cols=3, numbered_cells={0: 2, 2: 1}))
        self.assertFalse(validator.check_win([0, 1, 2]))
        self.assertTrue(validator.check_win([2, 1, 0]))

    def test_dead_end_detection(self) -> None:
        validator = ZipPathValidator(ZipLevelConfig(rows=2, cols=3, numbered_cells={0: 1, 5: 2}))
        self.assertTrue(validator.has_legal_moves([]))
        self.assertTrue(validator.has_legal_moves([0, 1]))
        self.assertFalse(validator.has_legal_moves([0, 1, 4, 3]))
        self.assertEqual(validator.legal_extensions([0, 1]), [2, 4])

    def test_move_acceptance(self) -> None:
        self.assertFalse(self.square.add_to_path([], 3).accepted)
        self.assertTrue(self.square.add_to_path([], 0).accepted)
        self.assertTrue(self.square.add_to_path([0, 1], 0).accepted)
        self.assertTrue(self.square.add_to_path([0, 1], 1).accepted)

    def test_add_to_path_sequence(self) -> None:
        move = self.square.add_to_path([], 1)
        self.assertEqual(move.outcome, REJECTED)
        self.assertEqual(move.path, [])

        path = []
        for cell in (0, 1, 3):
            move = self.square.add_to_path(path, cell)
            self.assertEqual(move.outcome, EXTENDED)
            self.assertFalse(move.won)
            path = move.path

        move = self.square.add_to_path(path, 3)
        self.assertEqual(move.outcome, UNCHANGED)

        move = self.square.add_to_path(path, 1)
        self.assertEqual(move.outcome, BACKTRACKED)
        self.assertEqual(move.path, [0, 1])

        move = self.square.add_to_path([0, 1, 3], 2)
        self.assertEqual(move.outcome, EXTENDED)
        self.assertTrue(move.won)
        self.assertEqual(move.path, [0, 1, 3, 2])


class ZipGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.output_dir = Path(self.tmp.name) / "zip"

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_serpentine_covers_grid(self) -> None:
        for by_column in (False, True):
            path = serpentine_path(4, 3, by_column=by_column)
            self.assertEqual(sorted(path), list(range(12)))
            self.assertTrue(all(are_adjacent(a, b, 3) for a, b in zip(path, path[1:])))

    def test_random_levels_are_solvable(self) -> None:
        for rows, cols in [(1, 1), (1, 4), (4, 4), (5, 6)]:
            generator = ZipGenerator(output_dir=self.output_dir, rows=rows, cols=cols, seed=rows * 10 + cols)
            for _ in range(5):
                record = generator.create_random_puzzle()
                validator = ZipPathValidator(record.config)
                self.assertTrue(validator.check_win(record.solution))
                self.assertEqual(record.config.start_cell, record.solution[0])

    def test_random_levels_score_with_their_level(self) -> None:
        generator = ZipGenerator(output_dir=self.output_dir, rows=3, cols=3, seed=8)
        record = generator.create_random_puzzle()
        self.assertEqual(record.config.level, 1)
        self.assertEqual(level_score(record.config), 100)

        generator = ZipGenerator(output_dir=self.output_dir, rows=3, cols=3, score_level=3, seed=8)
        self.assertEqual(level_score(generator.create_random_puzzle().config), 300)

    def test_catalogue_records(self) -> None:
        generator = ZipGenerator(output_dir=self.output_dir)
        records = generator.create_catalogue()
        self.assertEqual(len(records), 10)
        self.assertEqual(records[0].id, "zip-level-1")
        self.assertIsNone(records[0].solution)
        self.assertEqual(records[0].prompt, "Connect 1 to 3 to fill the grid!")


class ZipEvaluatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        output_dir = Path(self.tmp.name) / "zip"
        self.generator = ZipGenerator(output_dir=output_dir, rows=4, cols=5, seed=5)
        self.random_record = self.generator.create_puzzle(puzzle_id="random")
        self.level_record = self.generator.create_puzzle(level=2, puzzle_id="level-2")
        self.metadata_path = output_dir / "puzzles.json"
        self.generator.write_metadata([self.random_record, self.level_record], self.metadata_path)
        self.evaluator = ZipEvaluator(self.metadata_path)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_metadata_round_trip(self) -> None:
        payload = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        self.assertEqual([item["id"] for item in payload], ["random", "level-2"])
        self.assertEqual(ZipLevelConfig.from_dict(payload[1]), ZIP_LEVELS[1])

    def test_solution_is_solved(self) -> None:
        result = self.evaluator.evaluate("random", self.random_record.solution)
        self.assertTrue(result.solved)
        self.assertEqual(result.cells_covered, 20)
        self.assertAlmostEqual(result.coverage, 1.0)
        self.assertEqual(result.highest_number, self.random_record.config.max_number)
        self.assertEqual(result.rejected_cells, [])
        self.assertEqual(result.score, 100)

    def test_partial_attempt_with_backtrack(self) -> None:
        # level 2: 5x5, waypoints 1 (0,0), 2 (0,4), 3 (4,0), 4 (4,4)
        result = self.evaluator.evaluate("level-2", [3, 0, 1, 2, 3, 4, 7, 3])
        self.assertFalse(result.solved)
        self.assertEqual(result.rejected_cells, [3, 7])
        self.assertEqual(result.backtracks, 1)
        self.assertEqual(result.path, [0, 1, 2, 3])
        self.assertEqual(result.highest_number, 1)
        self.assertEqual(result.score, 0)

    def test_row_serpentine_solves_level_two(self) -> None:
        path = serpentine_path(5, 5)
        result = self.evaluator.evaluate("level-2", path)
        self.assertTrue(result.solved)
        self.assertEqual(result.score, level_score(ZIP_LEVELS[1]))
        self.assertEqual(result.score, 200)

    def test_column_serpentine_hits_three_too_early(self) -> None:
        path = serpentine_path(5, 5, by_column=True)
        result = self.evaluator.evaluate("level-2", path)
        self.assertFalse(result.solved)
        self.assertEqual(result.rejected_cells, [20, 21, 24])
        self.assertEqual(result.path[:5], [0, 5, 10, 15, 16])
        self.assertEqual(result.cells_covered, 22)
        self.assertEqual(result.highest_number, 2)
        self.assertEqual(result.message, "Path stops before waypoint 3.")


if __name__ == "__main__":
    unittest.main()
