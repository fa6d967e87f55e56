"""
Seawater properties from the Thermodynamic Equation Of Seawater 2010 (TEOS-10).

Every method of :class:`SeawaterProperties` accepts its physical arguments
as scalars, sequences (lists, 1-d arrays, pandas Series) or grids (2-d
arrays, pandas DataFrames).  The first argument is the *primary* one:

* all other arguments are recycled cyclically to its length;
* the result has its shape (``float``, 1-d array or 2-d grid, with pandas
  labels restored for pandas input).

``SA_from_SP`` and ``SP_from_SA`` additionally accept a grid of salinity
together with a longitude axis matching the grid rows and a latitude axis
matching the grid columns; the axes are expanded to the full grid.

``Nsquared`` and ``Turner_Rsubrho`` work on adjacent pairs of a water
column and return named tuples of flat arrays one element shorter than
the input.  They do not accept grids.

Physically invalid inputs give ``NaN`` rather than an exception.

References:
    IOC, SCOR and IAPSO (2010) The international thermodynamic equation of
    seawater - 2010: Calculation and use of thermodynamic properties.
    http://www.teos-10.org
"""

import logging
from typing import Any, NamedTuple, Optional, Sequence, Union

import numpy as np
import pandas as pd

from seagsw.config import DispatchOptions
from seagsw.constants import NSQUARED_LATITUDE_DEFAULT, SATURATION_FRACTION_DEFAULT
from seagsw.dispatch import KernelDispatcher, check_pairable, reshape_result
from seagsw.kernel import GswKernel, Kernel
from seagsw.operations import get_operation
from seagsw.reconcile import expand_grid, reconcile
from seagsw.shape import describe

logger = logging.getLogger(__name__)

ArrayLike = Union[float, Sequence[float], np.ndarray, pd.Series, pd.DataFrame]
Result = Union[float, np.ndarray, pd.Series, pd.DataFrame]


class NsquaredResult(NamedTuple):
    """Buoyancy frequency squared between adjacent samples"""

    N2: np.ndarray  # s^-2
    p_mid: np.ndarray  # dbar


class TurnerRsubrhoResult(NamedTuple):
    """Turner angle and density ratio between adjacent samples"""

    Tu: np.ndarray  # degrees
    Rsubrho: np.ndarray  # unitless
    p_mid: np.ndarray  # dbar


class SeawaterProperties:
    """
    TEOS-10 property calculator over an injectable numeric kernel.

    Parameters
    ----------
    kernel : Kernel, optional
        Per-element numeric kernel.  Defaults to :class:`GswKernel`.
    options : DispatchOptions, optional
        Recycling and threading options.

    Examples
    --------
    >>> props = SeawaterProperties()
    >>> round(props.rho(34.7118, 28.8099, 10), 2)
    1021.84
    >>> props.sigma0([34.7118, 34.8915], 28.8099).shape
    (2,)
    """

    def __init__(
        self,
        kernel: Optional[Kernel] = None,
        options: Optional[DispatchOptions] = None,
    ):
        self.kernel = kernel if kernel is not None else GswKernel()
        self.options = options or DispatchOptions()
        self.dispatcher = KernelDispatcher(self.kernel, self.options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kernel={type(self.kernel).__name__}, options={self.options})"

    # ------------------------------------------------------------------
    # Dispatch helpers
    # ------------------------------------------------------------------

    def _elementwise(self, name: str, **arguments: Any):
        operation = get_operation(name)
        primary = arguments[operation.parameters[0]]
        shape = describe(primary)
        logger.debug("%s: primary %s", name, shape)

        if operation.expands_grid:
            arguments["longitude"], arguments["latitude"] = expand_grid(
                shape, arguments["longitude"], arguments["latitude"]
            )

        ordered = {param: arguments[param] for param in operation.parameters}
        reconciled = reconcile(ordered, shape, strict=self.options.strict_recycling)
        flat = self.dispatcher.elementwise(operation, reconciled)
        return reshape_result(flat, shape, name=name)

    def _paired(self, name: str, **arguments: Any):
        operation = get_operation(name)
        shape = describe(arguments[operation.parameters[0]])
        check_pairable(operation, shape)
        ordered = {param: arguments[param] for param in operation.parameters}
        reconciled = reconcile(ordered, shape, strict=self.options.strict_recycling)
        return self.dispatcher.paired(operation, reconciled, shape)

    # ------------------------------------------------------------------
    # Thermal expansion, saline contraction and related coefficients
    # ------------------------------------------------------------------

    def adiabatic_lapse_rate_from_CT(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """
        Adiabatic lapse rate from Conservative Temperature.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        CT : float or array_like
            Conservative Temperature (deg C).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        float or ndarray
            Adiabatic lapse rate (K/Pa).  Note the unit: 1 K/Pa is
            1e4 K/dbar.
        """
        return self._elementwise("adiabatic_lapse_rate_from_CT", SA=SA, CT=CT, p=p)

    def alpha(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """
        Thermal expansion coefficient with respect to Conservative Temperature.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        CT : float or array_like
            Conservative Temperature (deg C).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        float or ndarray
            Thermal expansion coefficient (1/K).
        """
        return self._elementwise("alpha", SA=SA, CT=CT, p=p)

    def alpha_on_beta(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Ratio of thermal expansion to saline contraction coefficient ((g/kg)/K)."""
        return self._elementwise("alpha_on_beta", SA=SA, CT=CT, p=p)

    def alpha_wrt_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Thermal expansion coefficient with respect to in-situ temperature (1/K)."""
        return self._elementwise("alpha_wrt_t_exact", SA=SA, t=t, p=p)

    def beta(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """
        Saline contraction coefficient at constant Conservative Temperature.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        CT : float or array_like
            Conservative Temperature (deg C).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        float or ndarray
            Saline contraction coefficient (kg/g).
        """
        return self._elementwise("beta", SA=SA, CT=CT, p=p)

    def beta_const_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Saline contraction coefficient at constant in-situ temperature (kg/g)."""
        return self._elementwise("beta_const_t_exact", SA=SA, t=t, p=p)

    def cabbeling(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Cabbeling coefficient with respect to Conservative Temperature (1/K^2)."""
        return self._elementwise("cabbeling", SA=SA, CT=CT, p=p)

    def thermobaric(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Thermobaric coefficient with respect to Conservative Temperature (1/(K Pa))."""
        return self._elementwise("thermobaric", SA=SA, CT=CT, p=p)

    # ------------------------------------------------------------------
    # Salinity and conductivity
    # ------------------------------------------------------------------

    def C_from_SP(self, SP: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """
        Conductivity from Practical Salinity.

        Parameters
        ----------
        SP : float or array_like
            Practical Salinity (PSS-78, unitless).
        t : float or array_like
            In-situ temperature (ITS-90, deg C).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        float or ndarray
            Conductivity (mS/cm).
        """
        return self._elementwise("C_from_SP", SP=SP, t=t, p=p)

    def SP_from_C(self, C: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Practical Salinity (PSS-78) from conductivity C (mS/cm)."""
        return self._elementwise("SP_from_C", C=C, t=t, p=p)

    def SA_from_rho(self, rho: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Absolute Salinity (g/kg) from in-situ density (kg/m^3)."""
        return self._elementwise("SA_from_rho", rho=rho, CT=CT, p=p)

    def SA_from_SP(
        self,
        SP: ArrayLike,
        p: ArrayLike,
        longitude: ArrayLike,
        latitude: ArrayLike,
    ) -> Result:
        """
        Absolute Salinity from Practical Salinity.

        If ``SP`` is a grid whose row count equals ``len(longitude)`` and
        whose column count equals ``len(latitude)``, the axes are expanded
        so that ``SP[i, j]`` is evaluated at ``(longitude[i], latitude[j])``.
        Otherwise ``longitude`` and ``latitude`` are recycled like any
        other argument.

        Parameters
        ----------
        SP : float or array_like
            Practical Salinity (PSS-78, unitless).
        p : float or array_like
            Sea pressure (dbar).
        longitude : float or array_like
            Longitude in decimal degrees (0 to 360 or -180 to 180).
        latitude : float or array_like
            Latitude in decimal degrees (-90 to 90).

        Returns
        -------
        float or ndarray
            Absolute Salinity (g/kg), shaped like ``SP``.

        Examples
        --------
        >>> SP = np.full((3, 2), 34.5487)
        >>> SeawaterProperties().SA_from_SP(SP, 10, [188, 189, 190], [4, 5]).shape
        (3, 2)
        """
        return self._elementwise(
            "SA_from_SP", SP=SP, p=p, longitude=longitude, latitude=latitude
        )

    def SP_from_SA(
        self,
        SA: ArrayLike,
        p: ArrayLike,
        longitude: ArrayLike,
        latitude: ArrayLike,
    ) -> Result:
        """
        Practical Salinity from Absolute Salinity.

        Grid handling of ``longitude`` and ``latitude`` follows
        :meth:`SA_from_SP`.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        p : float or array_like
            Sea pressure (dbar).
        longitude : float or array_like
            Longitude in decimal degrees.
        latitude : float or array_like
            Latitude in decimal degrees.

        Returns
        -------
        float or ndarray
            Practical Salinity (PSS-78), shaped like ``SA``.
        """
        return self._elementwise(
            "SP_from_SA", SA=SA, p=p, longitude=longitude, latitude=latitude
        )

    # ------------------------------------------------------------------
    # Temperature conversions and freezing point
    # ------------------------------------------------------------------

    def CT_freezing(
        self,
        SA: ArrayLike,
        p: ArrayLike,
        saturation_fraction: ArrayLike = SATURATION_FRACTION_DEFAULT,
    ) -> Result:
        """
        Conservative Temperature at which seawater freezes.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        p : float or array_like
            Sea pressure (dbar).
        saturation_fraction : float or array_like, default ``1``
            Saturation fraction of dissolved air in seawater (0 to 1).

        Returns
        -------
        float or ndarray
            Freezing temperature expressed as Conservative Temperature
            (deg C).
        """
        return self._elementwise(
            "CT_freezing", SA=SA, p=p, saturation_fraction=saturation_fraction
        )

    def t_freezing(
        self,
        SA: ArrayLike,
        p: ArrayLike,
        saturation_fraction: ArrayLike = SATURATION_FRACTION_DEFAULT,
    ) -> Result:
        """
        In-situ temperature at which seawater freezes.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        p : float or array_like
            Sea pressure (dbar).
        saturation_fraction : float or array_like, default ``1``
            Saturation fraction of dissolved air in seawater (0 to 1).

        Returns
        -------
        float or ndarray
            Freezing temperature (ITS-90, deg C).
        """
        return self._elementwise(
            "t_freezing", SA=SA, p=p, saturation_fraction=saturation_fraction
        )

    def CT_from_pt(self, SA: ArrayLike, pt: ArrayLike) -> Result:
        """Conservative Temperature (deg C) from potential temperature (deg C)."""
        return self._elementwise("CT_from_pt", SA=SA, pt=pt)

    def CT_from_t(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Conservative Temperature (deg C) from in-situ temperature (deg C)."""
        return self._elementwise("CT_from_t", SA=SA, t=t, p=p)

    def t_from_CT(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """In-situ temperature (deg C) from Conservative Temperature (deg C)."""
        return self._elementwise("t_from_CT", SA=SA, CT=CT, p=p)

    # ------------------------------------------------------------------
    # Energy
    # ------------------------------------------------------------------

    def cp_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Isobaric heat capacity (J/(kg K))."""
        return self._elementwise("cp_t_exact", SA=SA, t=t, p=p)

    def enthalpy(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Specific enthalpy of seawater from Conservative Temperature (J/kg)."""
        return self._elementwise("enthalpy", SA=SA, CT=CT, p=p)

    def enthalpy_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Specific enthalpy of seawater from in-situ temperature (J/kg)."""
        return self._elementwise("enthalpy_t_exact", SA=SA, t=t, p=p)

    def entropy_from_t(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Specific entropy from in-situ temperature (J/(kg K))."""
        return self._elementwise("entropy_from_t", SA=SA, t=t, p=p)

    # ------------------------------------------------------------------
    # Density and specific volume
    # ------------------------------------------------------------------

    def rho(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """
        In-situ density from Conservative Temperature.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        CT : float or array_like
            Conservative Temperature (deg C).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        float or ndarray
            In-situ density (kg/m^3).
        """
        return self._elementwise("rho", SA=SA, CT=CT, p=p)

    def rho_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """In-situ density from in-situ temperature (kg/m^3)."""
        return self._elementwise("rho_t_exact", SA=SA, t=t, p=p)

    def pot_rho_t_exact(
        self,
        SA: ArrayLike,
        t: ArrayLike,
        p: ArrayLike,
        p_ref: ArrayLike,
    ) -> Result:
        """
        Potential density.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).
        t : float or array_like
            In-situ temperature (ITS-90, deg C).
        p : float or array_like
            Sea pressure (dbar).
        p_ref : float or array_like
            Reference pressure (dbar).

        Returns
        -------
        float or ndarray
            Potential density (kg/m^3).
        """
        return self._elementwise("pot_rho_t_exact", SA=SA, t=t, p=p, p_ref=p_ref)

    def sigma0(self, SA: ArrayLike, CT: ArrayLike) -> Result:
        """Potential density anomaly referenced to 0 dbar (kg/m^3)."""
        return self._elementwise("sigma0", SA=SA, CT=CT)

    def sigma1(self, SA: ArrayLike, CT: ArrayLike) -> Result:
        """Potential density anomaly referenced to 1000 dbar (kg/m^3)."""
        return self._elementwise("sigma1", SA=SA, CT=CT)

    def sigma2(self, SA: ArrayLike, CT: ArrayLike) -> Result:
        """Potential density anomaly referenced to 2000 dbar (kg/m^3)."""
        return self._elementwise("sigma2", SA=SA, CT=CT)

    def sigma3(self, SA: ArrayLike, CT: ArrayLike) -> Result:
        """Potential density anomaly referenced to 3000 dbar (kg/m^3)."""
        return self._elementwise("sigma3", SA=SA, CT=CT)

    def sigma4(self, SA: ArrayLike, CT: ArrayLike) -> Result:
        """Potential density anomaly referenced to 4000 dbar (kg/m^3)."""
        return self._elementwise("sigma4", SA=SA, CT=CT)

    def specvol(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """
        Specific volume (m^3/kg), computed as ``1 / rho(SA, CT, p)``.

        The result keeps the shape handling of :meth:`rho`.
        """
        return 1.0 / self.rho(SA, CT, p)

    def specvol_anom(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Specific volume anomaly relative to SA = 35.16504 g/kg, CT = 0 deg C (m^3/kg)."""
        return self._elementwise("specvol_anom", SA=SA, CT=CT, p=p)

    def specvol_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Specific volume from in-situ temperature (m^3/kg)."""
        return self._elementwise("specvol_t_exact", SA=SA, t=t, p=p)

    # ------------------------------------------------------------------
    # Sound speed, gravity and depth
    # ------------------------------------------------------------------

    def sound_speed(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> Result:
        """Speed of sound in seawater from Conservative Temperature (m/s)."""
        return self._elementwise("sound_speed", SA=SA, CT=CT, p=p)

    def sound_speed_t_exact(self, SA: ArrayLike, t: ArrayLike, p: ArrayLike) -> Result:
        """Speed of sound in seawater from in-situ temperature (m/s)."""
        return self._elementwise("sound_speed_t_exact", SA=SA, t=t, p=p)

    def grav(self, latitude: ArrayLike, p: ArrayLike) -> Result:
        """
        Gravitational acceleration.

        Parameters
        ----------
        latitude : float or array_like
            Latitude in decimal degrees north (-90 to 90).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        float or ndarray
            Gravitational acceleration (m/s^2), shaped like ``latitude``.
        """
        return self._elementwise("grav", latitude=latitude, p=p)

    def z_from_p(self, p: ArrayLike, latitude: ArrayLike) -> Result:
        """Height (m, negative below the sea surface) from sea pressure (dbar)."""
        return self._elementwise("z_from_p", p=p, latitude=latitude)

    # ------------------------------------------------------------------
    # Water column (paired) properties
    # ------------------------------------------------------------------

    def Nsquared(
        self,
        SA: ArrayLike,
        CT: ArrayLike,
        p: ArrayLike,
        latitude: ArrayLike = NSQUARED_LATITUDE_DEFAULT,
    ) -> NsquaredResult:
        """
        Buoyancy (Brunt-Vaisala) frequency squared.

        Evaluated between each pair of adjacent samples of a single water
        column.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).  Must not be two-dimensional.
        CT : float or array_like
            Conservative Temperature (deg C).
        p : float or array_like
            Sea pressure (dbar).
        latitude : float or array_like, default ``0``
            Latitude in decimal degrees (-90 to 90), used for gravity.

        Returns
        -------
        NsquaredResult
            ``N2`` (s^-2) and ``p_mid`` (dbar), each with ``len(SA) - 1``
            elements.

        Raises
        ------
        ShapeUnsupportedError
            If ``SA`` is a grid.
        """
        N2, p_mid = self._paired("Nsquared", SA=SA, CT=CT, p=p, latitude=latitude)
        return NsquaredResult(N2, p_mid)

    def Turner_Rsubrho(self, SA: ArrayLike, CT: ArrayLike, p: ArrayLike) -> TurnerRsubrhoResult:
        """
        Turner angle and density ratio.

        Evaluated between each pair of adjacent samples of a single water
        column.

        Parameters
        ----------
        SA : float or array_like
            Absolute Salinity (g/kg).  Must not be two-dimensional.
        CT : float or array_like
            Conservative Temperature (deg C).
        p : float or array_like
            Sea pressure (dbar).

        Returns
        -------
        TurnerRsubrhoResult
            ``Tu`` (degrees), ``Rsubrho`` (unitless) and ``p_mid`` (dbar),
            each with ``len(SA) - 1`` elements.

        Raises
        ------
        ShapeUnsupportedError
            If ``SA`` is a grid.
        """
        Tu, Rsubrho, p_mid = self._paired("Turner_Rsubrho", SA=SA, CT=CT, p=p)
        return TurnerRsubrhoResult(Tu, Rsubrho, p_mid)
