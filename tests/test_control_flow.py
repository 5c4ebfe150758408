"""Tests for control flow instructions."""

import pytest
from chix8 import execute, create_state, Quirks


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_execute_jump_max_address(self, fresh_state):
        """1NNN - Jump to the last word-aligned address."""
        state = execute(fresh_state, 0x1FFE)
        assert state.pc == 0xFFE


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """Test skip instructions with zero values."""
        state = fresh_state
        initial_pc = state.pc

        # V0 == 0, should skip
        state = execute(state, 0x3000)  # Skip if V0 == 0
        assert state.pc == initial_pc + 2

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestKeySkips:
    """Test EX9E / EXA1 against the current key state."""

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip if key VX is down."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))
        state = state.replace(keypad=state.keypad.at[5].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_key_up(self, fresh_state):
        """EX9E - No skip when key VX is up."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        """EXA1 - Skip if key VX is up."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_key_down(self, fresh_state):
        """EXA1 - No skip when key VX is down."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(5))
        state = state.replace(keypad=state.keypad.at[5].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE0A1)
        assert state.pc == initial_pc

    def test_key_state_is_level_triggered(self, fresh_state):
        """A held key satisfies EX9E every time it is checked."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xA))
        state = state.replace(keypad=state.keypad.at[0xA].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        state = execute(state, 0xE09E)

        assert state.pc == initial_pc + 4
        assert state.keypad[0xA]

    def test_key_index_uses_low_nibble(self, fresh_state):
        """Only the low nibble of VX selects the key."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0x13))
        state = state.replace(keypad=state.keypad.at[3].set(True))
        initial_pc = state.pc

        state = execute(state, 0xE09E)
        assert state.pc == initial_pc + 2


class TestJumpWithOffset:
    """Test jump with offset under both quirk settings."""

    def test_jump_with_offset_v0(self, cosmac_state):
        """BNNN - Jump with V0 offset."""
        state = execute(cosmac_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_vx(self, modern_state):
        """BXNN - Jump with VX offset."""
        state = execute(modern_state, 0x6210)  # V2 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V2
        assert state.pc == 0x260

    def test_jump_quirk_comparison(self):
        """jump_with_offset_uses_vx picks the offset register."""
        state_v0 = create_state(quirks=Quirks(jump_with_offset_uses_vx=False))
        state_v0 = execute(state_v0, 0x6010)  # V0 = 0x10
        state_v0 = execute(state_v0, 0x6230)  # V2 = 0x30
        state_v0 = execute(state_v0, 0xB250)

        state_vx = create_state(quirks=Quirks(jump_with_offset_uses_vx=True))
        state_vx = execute(state_vx, 0x6010)  # V0 = 0x10
        state_vx = execute(state_vx, 0x6230)  # V2 = 0x30
        state_vx = execute(state_vx, 0xB250)

        assert state_v0.pc == 0x260  # 0x250 + 0x10 (used V0)
        assert state_vx.pc == 0x280  # 0x250 + 0x30 (used V2)

    def test_jump_with_offset_wraps_to_12_bits(self, cosmac_state):
        """BNNN - Target is masked to 12 bits."""
        state = execute(cosmac_state, 0x60FF)  # V0 = 0xFF
        state = execute(state, 0xBFFF)
        assert state.pc == (0xFFF + 0xFF) & 0xFFF
