"""Behaviour toggles for instructions that historical interpreters disagree on."""

from flax.struct import dataclass


@dataclass(frozen=True)
class Quirks:
    """Quirk configuration, fixed for the lifetime of a state.

    Attributes:
        shift_uses_source_register: 8XY6/8XYE copy VY into VX before shifting
            (COSMAC VIP). When False, VX is shifted in place and VY is ignored.
        load_store_increments_index: FX55/FX65 leave I pointing past the last
            register transferred (I += X + 1). When False, I is unchanged.
        draw_wraps_at_edges: sprite pixels falling off the right or bottom edge
            reappear on the opposite edge. When False they are clipped.
        jump_with_offset_uses_vx: BXNN jumps to XNN + VX (CHIP-48). When False,
            BNNN jumps to NNN + V0.

    The COSMAC VIP also cleared VF after 8XY1/8XY2/8XY3. That behaviour is
    not modelled by any profile: the logic ops always leave VF untouched.
    """
    shift_uses_source_register: bool = True
    load_store_increments_index: bool = True
    draw_wraps_at_edges: bool = False
    jump_with_offset_uses_vx: bool = False

    @classmethod
    def from_profile(cls, profile: str = "cosmac") -> "Quirks":
        """Get a predefined quirk set.

        Args:
            profile: Profile name ("cosmac", "modern")

        Returns:
            Quirks instance for the profile
        """
        if profile not in PROFILES:
            raise ValueError(
                f"Unknown quirk profile '{profile}'. Available: {list(PROFILES.keys())}"
            )
        return PROFILES[profile]


PROFILES = {
    "cosmac": Quirks(),  # RCA COSMAC VIP interpreter
    "modern": Quirks(  # CHIP-48 / SUPER-CHIP lineage
        shift_uses_source_register=False,
        load_store_increments_index=False,
        draw_wraps_at_edges=False,
        jump_with_offset_uses_vx=True,
    ),
}
