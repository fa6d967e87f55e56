"""
Table of TEOS-10 operations known to the dispatch layer.

Each :class:`Operation` records the positional parameter order handed to
the kernel, whether the operation works on adjacent pairs, the names of
its outputs and whether longitude/latitude axes are expanded onto a grid.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from seagsw.errors import UnknownOperationError


@dataclass(frozen=True)
class Operation:
    """
    Declarative description of one public operation.

    Parameters
    ----------
    name : str
        Operation name, shared by the public method and the kernel.
    parameters : tuple of str
        Ordered argument names; the first one is the primary argument.
    paired : bool
        ``True`` if the kernel consumes adjacent element pairs and the
        outputs have one element fewer than the inputs.
    outputs : tuple of str
        Names of the outputs.  Elementwise operations have exactly one.
    expands_grid : bool
        ``True`` if ``longitude``/``latitude`` are expanded onto a grid
        primary argument.
    """

    name: str
    parameters: Tuple[str, ...]
    paired: bool = False
    outputs: Tuple[str, ...] = ("value",)
    expands_grid: bool = False

    def __post_init__(self):
        if not self.parameters:
            raise ValueError(f"Operation '{self.name}' needs at least one parameter")
        if not self.paired and len(self.outputs) != 1:
            raise ValueError(f"Elementwise operation '{self.name}' must have one output")
        if self.expands_grid and not {"longitude", "latitude"} <= set(self.parameters):
            raise ValueError(f"Operation '{self.name}' has no longitude/latitude axes")

    @property
    def arity(self) -> int:
        return len(self.parameters)


_SA_CT_P = ("SA", "CT", "p")
_SA_T_P = ("SA", "t", "p")
_SA_CT = ("SA", "CT")

OPERATIONS: Dict[str, Operation] = {
    op.name: op
    for op in (
        Operation("adiabatic_lapse_rate_from_CT", _SA_CT_P),
        Operation("alpha", _SA_CT_P),
        Operation("alpha_on_beta", _SA_CT_P),
        Operation("alpha_wrt_t_exact", _SA_T_P),
        Operation("beta", _SA_CT_P),
        Operation("beta_const_t_exact", _SA_T_P),
        Operation("C_from_SP", ("SP", "t", "p")),
        Operation("cabbeling", _SA_CT_P),
        Operation("cp_t_exact", _SA_T_P),
        Operation("CT_freezing", ("SA", "p", "saturation_fraction")),
        Operation("CT_from_pt", ("SA", "pt")),
        Operation("CT_from_t", _SA_T_P),
        Operation("enthalpy", _SA_CT_P),
        Operation("enthalpy_t_exact", _SA_T_P),
        Operation("entropy_from_t", _SA_T_P),
        Operation("grav", ("latitude", "p")),
        Operation("pot_rho_t_exact", ("SA", "t", "p", "p_ref")),
        Operation("rho", _SA_CT_P),
        Operation("rho_t_exact", _SA_T_P),
        Operation("SA_from_rho", ("rho", "CT", "p")),
        Operation("SA_from_SP", ("SP", "p", "longitude", "latitude"), expands_grid=True),
        Operation("SP_from_SA", ("SA", "p", "longitude", "latitude"), expands_grid=True),
        Operation("SP_from_C", ("C", "t", "p")),
        Operation("sigma0", _SA_CT),
        Operation("sigma1", _SA_CT),
        Operation("sigma2", _SA_CT),
        Operation("sigma3", _SA_CT),
        Operation("sigma4", _SA_CT),
        Operation("sound_speed", _SA_CT_P),
        Operation("sound_speed_t_exact", _SA_T_P),
        Operation("specvol_anom", _SA_CT_P),
        Operation("specvol_t_exact", _SA_T_P),
        Operation("t_freezing", ("SA", "p", "saturation_fraction")),
        Operation("t_from_CT", _SA_CT_P),
        Operation("thermobaric", _SA_CT_P),
        Operation("z_from_p", ("p", "latitude")),
        Operation(
            "Nsquared",
            ("SA", "CT", "p", "latitude"),
            paired=True,
            outputs=("N2", "p_mid"),
        ),
        Operation(
            "Turner_Rsubrho",
            _SA_CT_P,
            paired=True,
            outputs=("Tu", "Rsubrho", "p_mid"),
        ),
    )
}


def get_operation(name: str) -> Operation:
    """Look up an operation by name."""
    try:
        return OPERATIONS[name]
    except KeyError:
        raise UnknownOperationError(f"Unknown operation: {name}") from None
