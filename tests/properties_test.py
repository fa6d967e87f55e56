import typing
from unittest.mock import Mock

import numpy as np
import pandas as pd
import pytest

import seagsw
from seagsw.config import DispatchOptions
from seagsw.errors import ArgumentLengthError, ShapeUnsupportedError
from seagsw.kernel import FunctionKernel
from seagsw.operations import OPERATIONS
from seagsw.properties import (
    ArrayLike,
    NsquaredResult,
    SeawaterProperties,
    TurnerRsubrhoResult,
)


class TestElementwiseOperations:
    """Shape handling of elementwise operations over the stub kernel"""

    def test_scalar_broadcast_law(self, props):
        scalar = props.rho(1.0, 2.0, 3.0)
        sequence = props.rho([1.0], [2.0], [3.0])
        assert isinstance(scalar, float)
        assert scalar == 321.0
        assert sequence.shape == (1,)
        assert scalar == sequence[0]

    def test_scalar_secondary_with_length_six_primary(self, props):
        SA = np.array([34.7118, 34.8915, 35.0256, 34.8472, 34.7366, 34.7324])
        result = props.sigma0(SA, 1.0)
        assert result.shape == (6,)
        np.testing.assert_allclose(result, SA - 1.0)

    def test_recycled_secondary(self, props):
        result = props.rho(np.zeros(5), [1.0, 2.0], 0.0)
        np.testing.assert_array_equal(result, [10.0, 20.0, 10.0, 20.0, 10.0])

    def test_grid_round_trip(self, props):
        SA = np.array([[30.0, 31.0], [32.0, 33.0], [34.0, 35.0]])
        result = props.rho(SA, 1.0, 0.5)
        assert result.shape == (3, 2)
        np.testing.assert_array_equal(result, SA + 60.0)

    def test_grid_secondary_aligned_cell_by_cell(self, props):
        SA = np.array([[30.0, 31.0], [32.0, 33.0], [34.0, 35.0]])
        CT = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        np.testing.assert_array_equal(props.sigma0(SA, CT), SA - CT)

    def test_grid_primary_with_short_secondary(self, props):
        SA = np.zeros((3, 2))
        result = props.sigma0(SA, [1.0, 2.0, 3.0])
        # column-major flattening: each column sees CT = [1, 2, 3]
        np.testing.assert_array_equal(result, -np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]]))

    def test_nan_propagates(self, props):
        result = props.rho([1.0, np.nan, 3.0], [0.0, 0.0, np.nan], 0.0)
        assert result[0] == 1.0
        assert np.isnan(result[1]) and np.isnan(result[2])

    def test_grav_primary_is_latitude(self, props):
        latitude = np.array([[0.0, 10.0], [20.0, 30.0]])
        result = props.grav(latitude, 1.0)
        assert result.shape == (2, 2)
        np.testing.assert_array_equal(result, latitude + 1.0)

    def test_series_in_series_out(self, props):
        SA = pd.Series([35.0, 34.0], index=pd.Index([10.0, 20.0], name="pressure"))
        result = props.sigma0(SA, 5.0)
        assert isinstance(result, pd.Series)
        assert result.index.equals(SA.index)
        assert result.name == "sigma0"
        assert list(result) == [30.0, 29.0]

    def test_dataframe_in_dataframe_out(self, props):
        SA = pd.DataFrame([[35.0, 34.0], [33.0, 32.0]], index=["n", "s"], columns=["w", "e"])
        result = props.sigma0(SA, 2.0)
        assert isinstance(result, pd.DataFrame)
        pd.testing.assert_frame_equal(result, SA - 2.0)

    def test_specvol_is_reciprocal_of_rho(self, props):
        SA = np.array([1.0, 2.0, 4.0])
        np.testing.assert_allclose(props.specvol(SA, 0.0, 0.0), 1.0 / SA)
        assert props.specvol(4.0, 0.0, 0.0) == 0.25

    def test_saturation_fraction_defaults_to_one(self, props):
        assert props.CT_freezing(35.0, 0.0) == 1.0
        assert props.t_freezing(35.0, 0.0) == -1.0

    def test_saturation_fraction_recycled(self, props):
        result = props.CT_freezing([35.0, 35.0, 35.0], 0.0, saturation_fraction=[0.0, 0.5])
        np.testing.assert_array_equal(result, [0.0, 0.5, 0.0])

    def test_strict_recycling(self, stub_kernel):
        strict = SeawaterProperties(stub_kernel, DispatchOptions(strict_recycling=True))
        with pytest.raises(ArgumentLengthError):
            strict.rho(np.zeros(6), np.zeros(4), 0.0)
        assert strict.rho(np.zeros(6), np.zeros(3), 0.0).shape == (6,)

    def test_permissive_recycling_truncates(self, props):
        result = props.rho(np.zeros(2), [1.0, 2.0, 3.0], 0.0)
        np.testing.assert_array_equal(result, [10.0, 20.0])

    def test_three_dimensional_primary_rejected(self, props):
        with pytest.raises(ShapeUnsupportedError):
            props.rho(np.zeros((2, 2, 2)), 1.0, 1.0)


class TestGridExpansion:
    """Longitude/latitude expansion for SA_from_SP and SP_from_SA"""

    def test_axes_expanded_onto_grid(self, props):
        longitude = np.array([10.0, 20.0, 30.0])
        latitude = np.array([1.0, 2.0])
        result = props.SA_from_SP(np.zeros((3, 2)), 0.0, longitude, latitude)
        expected = 1000.0 * longitude[:, None] + latitude[None, :]
        np.testing.assert_array_equal(result, expected)

    def test_sp_from_sa_expands_too(self, props):
        SA = np.full((2, 3), 35.0)
        result = props.SP_from_SA(SA, 0.0, [1.0, 2.0], [0.1, 0.2, 0.3])
        expected = 35.0 + 1000.0 * np.array([[1.0], [2.0]]) + np.array([[0.1, 0.2, 0.3]])
        np.testing.assert_allclose(result, expected)

    def test_mismatched_axes_recycled(self, props):
        longitude = [10.0, 20.0]
        latitude = [1.0, 2.0, 3.0]
        result = props.SA_from_SP(np.zeros((3, 2)), 0.0, longitude, latitude)
        flat = np.ravel(result, order="F")
        for k in range(6):
            assert flat[k] == 1000.0 * longitude[k % 2] + latitude[k % 3]

    def test_sequence_primary_not_expanded(self, props):
        result = props.SA_from_SP([35.0, 35.0, 35.0], 0.0, [10.0, 20.0, 30.0], 5.0)
        np.testing.assert_array_equal(result, [10005.0, 20005.0, 30005.0])

    def test_dataframe_grid_expanded(self, props):
        SP = pd.DataFrame(np.zeros((3, 2)), index=[10.0, 20.0, 30.0], columns=[1.0, 2.0])
        result = props.SA_from_SP(SP, 0.0, SP.index.to_numpy(), SP.columns.to_numpy())
        assert isinstance(result, pd.DataFrame)
        assert result.loc[30.0, 2.0] == 30002.0


class TestPairedOperations:
    """Adjacent-pair operations over the stub kernel"""

    def test_nsquared_two_samples(self, props):
        result = props.Nsquared([34.7118, 34.8915], [28.8099, 28.4392], [10.0, 50.0], 4.0)
        assert isinstance(result, NsquaredResult)
        assert result.N2.shape == result.p_mid.shape == (1,)
        assert result.N2[0] == pytest.approx(34.8915 - 34.7118)
        assert result.p_mid[0] == 30.0

    def test_nsquared_latitude_defaults_to_zero(self):
        func = Mock(return_value=(0.0, 0.0))
        props = SeawaterProperties(FunctionKernel(paired={"Nsquared": func}))
        props.Nsquared([1.0, 2.0], 3.0, [4.0, 5.0])
        first, second = func.call_args.args
        assert first[3] == 0.0 and second[3] == 0.0

    def test_turner_length_law(self, props):
        n = 7
        SA = np.linspace(35.0, 34.0, n)
        CT = np.linspace(20.0, 4.0, n)
        p = np.arange(n) * 100.0
        result = props.Turner_Rsubrho(SA, CT, p)
        assert isinstance(result, TurnerRsubrhoResult)
        for out in result:
            assert out.shape == (n - 1,)
        np.testing.assert_allclose(result.Tu, np.diff(SA))
        np.testing.assert_allclose(result.Rsubrho, np.diff(CT))
        np.testing.assert_allclose(result.p_mid, p[:-1] + 50.0)

    def test_series_input_gives_flat_arrays(self, props):
        SA = pd.Series([1.0, 2.0, 4.0], index=["a", "b", "c"])
        result = props.Nsquared(SA, 0.0, [0.0, 10.0, 20.0])
        assert isinstance(result.N2, np.ndarray)
        np.testing.assert_array_equal(result.N2, [1.0, 2.0])

    @pytest.mark.parametrize("name", ["Nsquared", "Turner_Rsubrho"])
    def test_grid_primary_rejected(self, name):
        func = Mock(return_value=(0.0, 0.0, 0.0))
        props = SeawaterProperties(FunctionKernel(paired={name: func}))
        with pytest.raises(ShapeUnsupportedError):
            getattr(props, name)(np.ones((3, 2)), 1.0, 1.0)
        func.assert_not_called()

    def test_grid_rejected_before_strict_recycling(self, stub_kernel):
        props = SeawaterProperties(stub_kernel, DispatchOptions(strict_recycling=True))
        with pytest.raises(ShapeUnsupportedError):
            props.Turner_Rsubrho(np.ones((3, 2)), [1.0, 2.0, 3.0, 4.0], 1.0)

    def test_nan_sample_reaches_only_its_two_pairs(self, props):
        SA = np.array([1.0, 2.0, np.nan, 4.0, 5.0, 6.0])
        result = props.Turner_Rsubrho(SA, 0.0, np.arange(6.0))
        np.testing.assert_array_equal(np.isnan(result.Tu), [False, True, True, False, False])
        assert not np.isnan(result.Rsubrho).any()
        assert not np.isnan(result.p_mid).any()


class TestPublicSurface:
    """Every operation is reachable as a method and a module function"""

    @pytest.mark.parametrize("name", sorted(OPERATIONS))
    def test_method_and_function_exist(self, name):
        assert callable(getattr(SeawaterProperties, name))
        assert callable(getattr(seagsw, name))

    @pytest.mark.parametrize("name", sorted(OPERATIONS) + ["specvol"])
    def test_method_is_annotated(self, name):
        hints = typing.get_type_hints(getattr(SeawaterProperties, name))
        assert "return" in hints
        for parameter in OPERATIONS.get(name, OPERATIONS["rho"]).parameters:
            assert hints[parameter] == ArrayLike

    def test_module_functions_use_gsw_kernel(self):
        assert isinstance(seagsw.rho.__self__.kernel, seagsw.GswKernel)

    def test_injected_kernel_is_used(self, stub_kernel):
        props = SeawaterProperties(kernel=stub_kernel)
        assert props.kernel is stub_kernel
        assert "FunctionKernel" in repr(props)
