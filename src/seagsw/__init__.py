# seagsw/__init__.py
"""
TEOS-10 seawater properties over scalars, sequences and grids.

The module-level functions use a default :class:`SeawaterProperties`
backed by :class:`~seagsw.kernel.GswKernel`.  Build your own
:class:`SeawaterProperties` to inject another kernel or options.
"""
import logging

from . import constants
from . import shape
from . import reconcile
from . import kernel
from . import dispatch
from . import operations
from .config import DispatchOptions
from .errors import (
    SeagswError,
    ShapeUnsupportedError,
    ArgumentLengthError,
    UnknownOperationError,
)
from .kernel import Kernel, FunctionKernel, GswKernel
from .properties import SeawaterProperties, NsquaredResult, TurnerRsubrhoResult

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

_default = SeawaterProperties()

adiabatic_lapse_rate_from_CT = _default.adiabatic_lapse_rate_from_CT
alpha = _default.alpha
alpha_on_beta = _default.alpha_on_beta
alpha_wrt_t_exact = _default.alpha_wrt_t_exact
beta = _default.beta
beta_const_t_exact = _default.beta_const_t_exact
C_from_SP = _default.C_from_SP
cabbeling = _default.cabbeling
cp_t_exact = _default.cp_t_exact
CT_freezing = _default.CT_freezing
CT_from_pt = _default.CT_from_pt
CT_from_t = _default.CT_from_t
enthalpy = _default.enthalpy
enthalpy_t_exact = _default.enthalpy_t_exact
entropy_from_t = _default.entropy_from_t
grav = _default.grav
Nsquared = _default.Nsquared
pot_rho_t_exact = _default.pot_rho_t_exact
rho = _default.rho
rho_t_exact = _default.rho_t_exact
SA_from_rho = _default.SA_from_rho
SA_from_SP = _default.SA_from_SP
sigma0 = _default.sigma0
sigma1 = _default.sigma1
sigma2 = _default.sigma2
sigma3 = _default.sigma3
sigma4 = _default.sigma4
sound_speed = _default.sound_speed
sound_speed_t_exact = _default.sound_speed_t_exact
specvol = _default.specvol
specvol_anom = _default.specvol_anom
specvol_t_exact = _default.specvol_t_exact
SP_from_C = _default.SP_from_C
SP_from_SA = _default.SP_from_SA
t_freezing = _default.t_freezing
t_from_CT = _default.t_from_CT
thermobaric = _default.thermobaric
Turner_Rsubrho = _default.Turner_Rsubrho
z_from_p = _default.z_from_p
