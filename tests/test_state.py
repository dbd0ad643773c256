"""Tests for SearchState."""

from labyrinth.core.state import SearchState, UnlockResult


class TestCreateInitial:
    """Tests for the initial state of a maze."""

    def test_starts_at_maze_start(self, key_detour_maze):
        """Test that the initial state sits on the start cell."""
        state = SearchState.create_initial(key_detour_maze)
        assert state.position == (0, 0)
        assert state.keys == 0
        assert state.remaining_keys == {(1, 1)}

    def test_doors_are_a_private_copy(self, key_detour_maze):
        """Test that the state copies the doors graph."""
        state = SearchState.create_initial(key_detour_maze)
        assert state.doors == key_detour_maze.doors_graph
        assert state.doors is not key_detour_maze.doors_graph
        assert state.doors[(0, 1)] is not key_detour_maze.doors_graph[(0, 1)]

    def test_key_on_start_cell_is_collected(self, key_at_start_maze):
        """Test that a key on the start cell is picked up at once."""
        state = SearchState.create_initial(key_at_start_maze)
        assert state.keys == 1
        assert state.remaining_keys == set()


class TestUnlockDoor:
    """Tests for opening doors on a live state."""

    def test_not_a_door(self, key_detour_maze):
        """Test unlocking where there is no door."""
        state = SearchState.create_initial(key_detour_maze)
        assert state.unlock_door((0, 1)) == UnlockResult.NOT_A_DOOR

    def test_locked_without_key(self, key_detour_maze):
        """Test unlocking with no key."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        assert state.is_locked((0, 2))
        assert state.unlock_door((0, 2)) == UnlockResult.LOCKED_NO_KEY
        assert state.is_locked((0, 2))

    def test_unlock_spends_key_and_removes_edge(self, key_detour_maze):
        """Test that unlocking spends a key and opens the door."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        state.keys = 1

        assert state.unlock_door((0, 2)) == UnlockResult.UNLOCKED
        assert state.keys == 0
        assert not state.is_locked((0, 2))
        # An unlocked door stays open
        assert state.unlock_door((0, 2)) == UnlockResult.NOT_A_DOOR

    def test_unlock_is_one_way(self, key_detour_maze):
        """Test that unlocking leaves the reverse door locked."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        state.keys = 1
        state.unlock_door((0, 2))

        state.move_to((0, 2))
        assert state.is_locked((0, 1))

    def test_unlock_does_not_touch_the_maze(self, key_detour_maze):
        """Test that unlocking leaves the maze graph alone."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        state.keys = 1
        state.unlock_door((0, 2))
        assert key_detour_maze.doors_graph[(0, 1)] == {(0, 2)}


class TestCollectKey:
    """Tests for key pickup."""

    def test_collect_key(self, key_detour_maze):
        """Test picking up a key."""
        state = SearchState.create_initial(key_detour_maze)
        assert state.collect_key((1, 1)) is True
        assert state.keys == 1
        assert state.remaining_keys == set()

    def test_key_is_collected_once(self, key_detour_maze):
        """Test that a key can only be picked up once."""
        state = SearchState.create_initial(key_detour_maze)
        state.collect_key((1, 1))
        assert state.collect_key((1, 1)) is False
        assert state.keys == 1

    def test_no_key_here(self, key_detour_maze):
        """Test picking up on a cell without a key."""
        state = SearchState.create_initial(key_detour_maze)
        assert state.collect_key((0, 1)) is False
        assert state.keys == 0


class TestTransfer:
    """Tests for deriving successor states."""

    def test_free_move(self, key_detour_maze):
        """Test moving through an open side."""
        state = SearchState.create_initial(key_detour_maze)
        new_state = state.transfer((0, 1))
        assert new_state is not None
        assert new_state.position == (0, 1)
        assert state.position == (0, 0)

    def test_blocked_by_locked_door(self, key_detour_maze):
        """Test that a locked door blocks a state with no key."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        assert state.transfer((0, 2)) is None

    def test_collects_key_on_arrival(self, key_detour_maze):
        """Test that arriving on a key cell picks it up."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        new_state = state.transfer((1, 1))
        assert new_state.keys == 1
        assert new_state.remaining_keys == set()
        assert state.keys == 0
        assert state.remaining_keys == {(1, 1)}

    def test_passes_door_with_key(self, key_detour_maze):
        """Test passing a door by spending a key."""
        state = SearchState.create_initial(key_detour_maze)
        state.move_to((0, 1))
        state.keys = 1
        new_state = state.transfer((0, 2))
        assert new_state.position == (0, 2)
        assert new_state.keys == 0
        assert not new_state.doors[(0, 1)]
        # The source state keeps its door locked and its key
        assert state.keys == 1
        assert state.is_locked((0, 2))


class TestEquality:
    """Tests for equality, hashing and fingerprints."""

    def test_equal_on_position_and_keys(self, key_detour_maze):
        """Test that equality only looks at position and keys."""
        a = SearchState.create_initial(key_detour_maze)
        b = a.copy()
        b.doors[(0, 1)].clear()
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_fingerprint_sees_doors(self, key_detour_maze):
        """Test that the fingerprint includes locked doors."""
        a = SearchState.create_initial(key_detour_maze)
        b = a.copy()
        b.doors[(0, 1)].clear()
        assert a.fingerprint() != b.fingerprint()

    def test_different_keys_are_different_states(self, key_detour_maze):
        """Test that key counts make states differ."""
        a = SearchState.create_initial(key_detour_maze)
        b = a.copy()
        b.keys = 1
        assert a != b

    def test_copy_is_independent(self, key_detour_maze):
        """Test that a copy can change without touching the original."""
        a = SearchState.create_initial(key_detour_maze)
        b = a.copy()
        b.collect_key((1, 1))
        b.move_to((0, 1))
        assert a.keys == 0
        assert a.position == (0, 0)
        assert a.remaining_keys == {(1, 1)}

    def test_not_equal_to_other_types(self, key_detour_maze):
        """Test comparing a state with a tuple."""
        state = SearchState.create_initial(key_detour_maze)
        assert state != (0, 0)
