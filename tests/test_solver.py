"""
Tests for the solver package

Covers:
1. Grid parsing and board validation
2. Transition engine (steps, pushes, blocked moves)
3. Deadlock oracle, heuristic and Zobrist hashing
4. Every strategy on small levels with known answers
5. Budgets, factory lookup and the one-call API

Usage:
    pytest tests/test_solver.py
"""

import sys
import threading
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.levels import TUTORIAL_LEVEL
from src.solver import (
    Board,
    Cell,
    CompactState,
    DeadlockOracle,
    GridState,
    HeuristicEstimator,
    InvalidGridError,
    Move,
    SolutionContext,
    SolveStatus,
    TransitionEngine,
    ZobristHasher,
    create_strategy,
    format_grid,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    parse_grid,
    resolve_strategy_name,
    solve,
)


ALL_STRATEGIES = ["deepening", "bestfirst", "breadthfirst", "depthfirst", "uniformcost"]

# One push left solves it
MINIMAL = ["#####", "#.$@#", "#####"]

# Fewest moves: LEFT, UP, LEFT, DOWN
OPEN_ROOM = [
    "#######",
    "#     #",
    "# $@  #",
    "#.    #",
    "#######",
]

# Piece starts in a corner away from its target
UNSOLVABLE = [
    "#####",
    "#$ .#",
    "#  @#",
    "#####",
]

ALREADY_SOLVED = ["#####", "#*@ #", "#####"]


def make_engine(rows):
    grid = parse_grid(rows)
    board = Board.from_grid(grid)
    return board, TransitionEngine(board), GridState.from_grid(grid)


def replay(rows, moves):
    """Apply moves through the engine, return the final state and push count."""
    _, engine, state = make_engine(rows)
    pushes = 0
    for move in moves:
        transition = engine.apply(state, move)
        assert transition is not None, f"Move {move.name} rejected"
        pushes += transition.is_push
        state = transition.state
    return state, pushes


# =============================================================================
# Parsing and validation
# =============================================================================

def test_parse_grid_round_trip():
    """Parsed grids format back to the same rows."""
    grid = parse_grid(OPEN_ROOM)
    assert grid[2][3] is Cell.ACTOR
    assert grid[3][1] is Cell.TARGET
    assert format_grid(grid) == tuple(OPEN_ROOM)


def test_parse_grid_floor_aliases():
    grid = parse_grid(["#-_#"])
    assert grid[0][1] is Cell.FLOOR
    assert grid[0][2] is Cell.FLOOR


def test_parse_grid_unknown_character():
    with pytest.raises(InvalidGridError):
        parse_grid(["#X@#"])


@pytest.mark.parametrize("rows, message", [
    ([], "empty"),
    (["#####", "#.$@#", "###"], "rectangular"),
    (["#####", "#.$ #", "#####"], "No actor"),
    (["#####", "@.$@#", "#####"], "actors"),
    (["#####", "#.$$@", "#####"], "pieces"),
])
def test_board_rejects_invalid_grids(rows, message):
    """Invalid levels raise InvalidGridError with a descriptive message."""
    with pytest.raises(InvalidGridError, match=message):
        Board.from_grid(parse_grid(rows))


def test_invalid_grid_error_is_value_error():
    with pytest.raises(ValueError):
        solve("bfs", ["#####", "#.$$@", "#####"])


def test_board_facts():
    board = Board.from_grid(parse_grid(OPEN_ROOM))
    assert (board.width, board.height) == (7, 5)
    assert board.targets == frozenset({(1, 3)})
    assert board.is_wall((0, 0))
    assert not board.is_wall((-1, 0))
    assert board.is_blocked((-1, 0))
    assert board.is_blocked((7, 2))
    assert not board.is_blocked((3, 2))
    assert board.cell_count == 35


# =============================================================================
# Transitions
# =============================================================================

def test_step_moves_actor_only():
    """A step into floor moves the actor and leaves pieces alone."""
    _, engine, state = make_engine(OPEN_ROOM)
    transition = engine.apply(state, Move.RIGHT)

    assert transition is not None
    assert not transition.is_push
    assert transition.cost == 1
    assert transition.state.actor == (4, 2)
    assert transition.state.piece_set() == state.piece_set()


def test_push_moves_piece():
    _, engine, state = make_engine(OPEN_ROOM)
    transition = engine.apply(state, Move.LEFT)

    assert transition.is_push
    assert transition.cost == 2
    assert transition.piece_from == (2, 2)
    assert transition.piece_to == (1, 2)
    assert transition.state.actor == (2, 2)
    assert transition.state.piece_set() == frozenset({(1, 2)})


def test_input_state_unchanged():
    """Applying a move never modifies the state it was applied to."""
    _, engine, state = make_engine(OPEN_ROOM)
    before = state.to_rows()
    engine.apply(state, Move.LEFT)
    assert state.to_rows() == before
    assert state.actor == (3, 2)


def test_walk_into_wall_rejected():
    _, engine, state = make_engine(MINIMAL)
    assert engine.apply(state, Move.UP) is None
    assert engine.apply(state, Move.RIGHT) is None


def test_push_into_wall_or_piece_rejected():
    _, engine, state = make_engine(["######", "#@$$.#", "#   .#", "######"])
    # Piece behind piece
    assert engine.apply(state, Move.RIGHT) is None

    _, engine, state = make_engine(["#####", "#$@.#", "#####"])
    # Piece against wall
    assert engine.apply(state, Move.LEFT) is None


def test_move_off_grid_rejected():
    """Cells outside the grid are blocked even without a wall border."""
    _, engine, state = make_engine(["@$.", "   "])
    assert engine.apply(state, Move.LEFT) is None
    assert engine.apply(state, Move.UP) is None


def test_target_marker_restored():
    """Leaving a target cell puts the target back."""
    _, engine, state = make_engine(["######", "#+ $.#", "#  $ #", "######"])
    after = engine.apply(state, Move.RIGHT).state
    assert after.cell_at((1, 1)) is Cell.TARGET
    assert after.cell_at((2, 1)) is Cell.ACTOR

    pushed = engine.apply(after, Move.RIGHT).state
    assert pushed.cell_at((4, 1)) is Cell.PIECE_ON_TARGET
    assert pushed.cell_at((3, 1)) is Cell.ACTOR


def test_successors_order():
    _, engine, state = make_engine(OPEN_ROOM)
    moves = [t.move for t in engine.successors(state)]
    assert moves == [Move.UP, Move.RIGHT, Move.DOWN, Move.LEFT]


def test_compact_and_grid_transitions_agree():
    """Both state forms describe the same result for every move."""
    board, engine, state = make_engine(OPEN_ROOM)
    compact = state.to_compact()

    for move in Move:
        full = engine.apply(state, move)
        small = engine.apply(compact, move)
        assert (full is None) == (small is None)
        if full is not None:
            assert small.state == full.state.to_compact()
            assert small.state.to_grid_state(board) == full.state
            assert small.is_push == full.is_push


def test_compact_round_trip():
    board, _, state = make_engine(TUTORIAL_LEVEL.rows)
    compact = CompactState.from_grid(state.grid)
    assert compact.to_grid_state(board) == state
    assert not compact.is_goal(board.targets)


# =============================================================================
# Deadlock, heuristic, hashing
# =============================================================================

def test_dead_cells():
    """Off-target corners are dead; targets and wall-side cells are not."""
    board = Board.from_grid(parse_grid(UNSOLVABLE))
    oracle = DeadlockOracle(board)

    assert oracle.is_dead_cell((1, 1))
    assert oracle.is_dead_cell((1, 2))
    assert oracle.is_dead_cell((3, 2))
    assert not oracle.is_dead_cell((3, 1))   # target
    assert not oracle.is_dead_cell((2, 1))   # wall above only
    assert oracle.dead_cell_count == 3

    assert oracle.is_deadlocked({(1, 1)})
    assert not oracle.is_deadlocked({(2, 1)})


def test_grid_edge_counts_as_blocked():
    board = Board.from_grid(parse_grid(["$ ", "@."]))
    oracle = DeadlockOracle(board)
    assert oracle.is_dead_cell((0, 0))


def test_heuristic_estimate():
    estimator = HeuristicEstimator({(1, 1)})
    assert estimator.estimate(frozenset({(3, 1)})) == 2
    assert estimator.estimate(frozenset({(1, 1)})) == 0
    assert estimator.estimate(frozenset()) == 0


def test_heuristic_greedy_matching():
    """Closest pairs are matched first."""
    estimator = HeuristicEstimator({(0, 0), (3, 0)})
    assert estimator.estimate(frozenset({(1, 0), (4, 0)})) == 2


def test_heuristic_is_memoised():
    estimator = HeuristicEstimator({(1, 1)})
    pieces = frozenset({(3, 1)})
    estimator.estimate(pieces)
    estimator.estimate(pieces)
    assert estimator.cache_size == 1


def test_zobrist_order_independent():
    board = Board.from_grid(parse_grid(TUTORIAL_LEVEL.rows))
    hasher = ZobristHasher(board, seed=7)
    a = CompactState(actor=(1, 3), pieces=frozenset([(1, 2), (2, 2), (3, 2)]))
    b = CompactState(actor=(1, 3), pieces=frozenset([(3, 2), (1, 2), (2, 2)]))
    assert hasher.hash_state(a) == hasher.hash_state(b)


def test_zobrist_seed_reproducible():
    board = Board.from_grid(parse_grid(TUTORIAL_LEVEL.rows))
    state = CompactState.from_grid(parse_grid(TUTORIAL_LEVEL.rows))
    assert ZobristHasher(board, seed=3).hash_state(state) == \
        ZobristHasher(board, seed=3).hash_state(state)


def test_zobrist_incremental_update():
    """Updating a parent's hash matches hashing the child from scratch."""
    board, engine, state = make_engine(OPEN_ROOM)
    hasher = ZobristHasher(board, seed=11)
    compact = state.to_compact()
    value = hasher.hash_state(compact)

    for transition in engine.successors(compact):
        assert hasher.update(value, compact, transition) == hasher.hash_state(transition.state)


# =============================================================================
# Strategies
# =============================================================================

@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_minimal_level(name):
    solution = solve(name, MINIMAL)
    assert solution.status is SolveStatus.SOLVED
    assert solution.move_names() == ["LEFT"]
    assert solution.push_count == 1
    assert solution.as_result() == {"moves": ["LEFT"]}


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_two_step_level(name):
    solution = solve(name, ["######", "#.$ @#", "######"])
    assert solution.move_names() == ["LEFT", "LEFT"]
    assert solution.push_count == 1
    assert solution.step_count == 1


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_already_solved(name):
    solution = solve(name, ALREADY_SOLVED)
    assert solution.is_solved
    assert solution.moves == []
    assert solution.as_result() == {"moves": []}


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_unsolvable_level(name):
    solution = solve(name, UNSOLVABLE)
    assert not solution.is_solved
    assert solution.status is SolveStatus.NO_SOLUTION
    assert solution.as_result() is None


# Piece stuck against the top wall, target below it; the start is not deadlocked
WALL_STUCK = [
    "######",
    "# $  #",
    "#   @#",
    "#  . #",
    "######",
]

# Solvable, but one reachable push drives the piece into a corner
CORNER_TRAP = [
    "######",
    "#    #",
    "# $@ #",
    "#.   #",
    "######",
]


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_unsolvable_without_deadlocked_start(name):
    """The search itself has to run out of states to report no solution."""
    solution = solve(name, WALL_STUCK)
    assert solution.status is SolveStatus.NO_SOLUTION
    assert solution.as_result() is None
    assert solution.metrics.states_explored > 0


def test_deepening_runs_out_of_thresholds():
    """No f above the last threshold ends the search before the round cap."""
    solution = solve("deepening", WALL_STUCK)
    assert solution.status is SolveStatus.NO_SOLUTION
    assert 1 < solution.metrics.rounds < 50


@pytest.mark.parametrize("name", ["deepening", "bestfirst"])
def test_corner_pushes_pruned(name):
    solution = solve(name, CORNER_TRAP)
    assert solution.move_names() == ["LEFT", "UP", "LEFT", "DOWN"]
    assert solution.metrics.pruned_branches > 0


def test_no_pruning_by_default_for_breadth_first():
    solution = solve("bfs", CORNER_TRAP)
    assert solution.move_count == 4
    assert solution.metrics.pruned_branches == 0


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_solutions_replay_to_goal(name):
    """Every returned move sequence is legal and ends in a goal state."""
    for rows in (OPEN_ROOM, TUTORIAL_LEVEL.rows):
        solution = solve(name, rows)
        assert solution.is_solved
        final, pushes = replay(rows, solution.moves)
        assert final.is_goal()
        assert solution.push_count == pushes


@pytest.mark.parametrize("name", ["breadthfirst", "uniformcost"])
def test_fewest_moves(name):
    solution = solve(name, OPEN_ROOM)
    assert solution.move_names() == ["LEFT", "UP", "LEFT", "DOWN"]
    assert solution.cost == 6


def test_tutorial_fewest_moves():
    solution = solve("bfs", TUTORIAL_LEVEL.rows)
    assert solution.move_count == 7
    assert solution.push_count == 3


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_deterministic(name):
    first = solve(name, TUTORIAL_LEVEL.rows, seed=1)
    second = solve(name, TUTORIAL_LEVEL.rows, seed=2)
    assert first.moves == second.moves


def test_deadlock_pruning_defaults():
    assert create_strategy("deepening").prune_deadlocks
    assert create_strategy("bestfirst").prune_deadlocks
    assert not create_strategy("breadthfirst").prune_deadlocks
    assert not create_strategy("depthfirst").prune_deadlocks
    assert not create_strategy("uniformcost").prune_deadlocks
    assert create_strategy("bfs", prune_deadlocks=True).prune_deadlocks


def test_pruning_reports_deadlocked_start():
    """With pruning on, a start with a dead piece is rejected immediately."""
    solution = solve("bfs", UNSOLVABLE, prune_deadlocks=True)
    assert solution.status is SolveStatus.NO_SOLUTION
    assert solution.metrics.states_explored == 0


# =============================================================================
# Budgets
# =============================================================================

@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_node_budget(name):
    solution = solve(name, TUTORIAL_LEVEL.rows, max_nodes=1)
    assert solution.status is SolveStatus.RESOURCE_EXHAUSTED
    assert solution.was_exhausted
    assert solution.moves == []
    assert solution.as_result() is None


def test_round_cap():
    """A solution beyond the last threshold is reported as exhausted."""
    solution = solve("deepening", MINIMAL, max_rounds=1)
    assert solution.status is SolveStatus.RESOURCE_EXHAUSTED
    assert solution.metrics.rounds == 1

    solution = solve("deepening", MINIMAL, max_rounds=2)
    assert solution.is_solved
    assert solution.metrics.rounds == 2


@pytest.mark.parametrize("name", ALL_STRATEGIES)
def test_cancelled_before_start(name):
    context = SolutionContext(grid=TUTORIAL_LEVEL.rows)
    context.cancel_flag.set()
    solution = create_strategy(name).solve(context)
    assert solution.status is SolveStatus.RESOURCE_EXHAUSTED


def test_timeout():
    context = SolutionContext(grid=TUTORIAL_LEVEL.rows, timeout_sec=0.0)
    context.start_time -= 1.0
    solution = create_strategy("bfs").solve(context)
    assert solution.status is SolveStatus.RESOURCE_EXHAUSTED


def test_context_clock():
    context = SolutionContext(grid=MINIMAL, timeout_sec=5.0)
    context.start_time -= 2.0
    assert context.elapsed_time() >= 2.0
    assert context.remaining_time() <= 3.0
    assert not context.is_cancelled()

    context.start_time -= 10.0
    assert context.remaining_time() < 0
    assert context.is_cancelled()


def test_progress_and_metrics():
    calls = []
    context = SolutionContext(
        grid=OPEN_ROOM,
        cancel_flag=threading.Event(),
        progress_callback=lambda percent, message: calls.append(percent)
    )
    solution = create_strategy("bfs").solve(context)
    assert solution.metrics.strategy_name == "breadthfirst"
    assert solution.metrics.states_explored == context.states_explored > 0
    assert solution.metrics.computation_time_ms >= 0
    assert all(0.0 <= percent < 1.0 for percent in calls)


# =============================================================================
# Factory and API
# =============================================================================

def test_strategy_registry():
    assert set(get_strategy_names()) == set(ALL_STRATEGIES)
    assert get_default_strategy_name() == "deepening"
    names = {info["name"] for info in get_strategy_info()}
    assert names == set(ALL_STRATEGIES)


@pytest.mark.parametrize("alias, name", [
    ("ida", "deepening"),
    ("astar", "bestfirst"),
    ("bfs", "breadthfirst"),
    ("dfs", "depthfirst"),
    ("ucs", "uniformcost"),
    ("BFS", "breadthfirst"),
])
def test_strategy_aliases(alias, name):
    assert resolve_strategy_name(alias) == name
    assert create_strategy(alias).name == name


def test_unknown_strategy():
    with pytest.raises(ValueError, match="Unknown strategy"):
        solve("montecarlo", MINIMAL)


def test_accepts_cell_rows():
    """Rows may be given as sequences of characters or cells."""
    rows = [list(row) for row in MINIMAL]
    assert solve("bfs", rows).move_names() == ["LEFT"]
    assert solve("bfs", parse_grid(MINIMAL)).move_names() == ["LEFT"]
