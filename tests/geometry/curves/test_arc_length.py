import pytest
from geometry.curves.arc_length import (
    ArcLengthParameterization,
    arc_length_to_parameter_value,
    build,
    integrate_speed,
    num_approximation_segments,
    parameter_value_to_arc_length,
)
from geometry.curves.cubic_spline import CubicSpline2d, CubicSpline3d
from geometry.curves.nondegenerate import DegenerateCurve, ThirdDerivativeConstant
from geometry.curves.quadratic_spline import QuadraticSpline2d
from geometry.primitives.parameter_value import ParameterValue
from geometry.primitives.point import Point2d, Point3d


TOLERANCE = 1e-4


@pytest.fixture
def spline():
    return CubicSpline3d.from_control_points([
        Point3d(x=1.0, y=1.0, z=1.0),
        Point3d(x=3.0, y=1.0, z=1.0),
        Point3d(x=3.0, y=3.0, z=1.0),
        Point3d(x=3.0, y=3.0, z=3.0),
    ])


@pytest.fixture
def parameterization(spline):
    return build(spline, TOLERANCE)


def reference_length(curve, t, subdivisions=2000):
    """Arc length from 0 to t by brute-force quadrature."""
    speed = curve.speed_profile()
    step = t / subdivisions
    return sum(integrate_speed(speed, i * step, (i + 1) * step) for i in range(subdivisions))


class TestNumApproximationSegments:
    """Tests for choosing the table resolution."""

    def test_known_value(self):
        assert num_approximation_segments(1e-4, 16.970562748477143) == 146

    def test_never_less_than_one(self):
        assert num_approximation_segments(1e-4, 0.0) == 1
        assert num_approximation_segments(1e6, 1.0) == 1

    def test_nonincreasing_as_tolerance_grows(self):
        tolerances = [1e-8, 1e-6, 1e-4, 1e-3, 0.01, 0.1, 1.0]
        counts = [num_approximation_segments(t, 20.0) for t in tolerances]
        assert counts == sorted(counts, reverse=True)

    def test_nondecreasing_as_bound_grows(self):
        bounds = [0.0, 0.5, 1.0, 10.0, 100.0, 1e4]
        counts = [num_approximation_segments(1e-3, b) for b in bounds]
        assert counts == sorted(counts)

    @pytest.mark.parametrize("tolerance", [0.0, -1e-3, float('nan'), float('inf')])
    def test_invalid_tolerance(self, tolerance):
        with pytest.raises(ValueError, match="tolerance must be positive"):
            num_approximation_segments(tolerance, 1.0)


class TestBuild:
    """Tests for building the arc length table."""

    def test_known_arc_length(self, parameterization):
        assert parameterization.total == pytest.approx(4.3303, abs=1e-3)
        assert parameterization.segment_count == 146

    def test_table_covers_domain(self, parameterization):
        assert parameterization.parameter_values[0] == 0.0
        assert parameterization.parameter_values[-1] == 1.0
        assert parameterization.arc_lengths[0] == 0.0
        assert parameterization.arc_lengths[-1] == parameterization.total

    def test_table_is_monotonic(self, parameterization):
        for column in (parameterization.parameter_values, parameterization.arc_lengths):
            assert all(b >= a for a, b in zip(column, column[1:]))

    def test_classification_is_stored(self, parameterization):
        assert isinstance(parameterization.classification, ThirdDerivativeConstant)

    @pytest.mark.parametrize("tolerance", [0.0, -1.0])
    def test_non_positive_tolerance(self, spline, tolerance):
        with pytest.raises(ValueError, match="tolerance must be positive"):
            build(spline, tolerance)

    def test_straight_line(self):
        line = CubicSpline2d.from_control_points([
            Point2d(x=0.0, y=0.0), Point2d(x=1.0, y=4.0 / 3.0),
            Point2d(x=2.0, y=8.0 / 3.0), Point2d(x=3.0, y=4.0),
        ])
        parameterization = build(line, TOLERANCE)
        assert parameterization.total == pytest.approx(5.0, abs=1e-12)

    def test_zero_length_curve(self):
        point = Point3d(x=1.0, y=2.0, z=3.0)
        parameterization = build(CubicSpline3d.from_control_points([point] * 4), TOLERANCE)
        assert parameterization.total == 0.0
        assert isinstance(parameterization.classification, DegenerateCurve)
        assert arc_length_to_parameter_value(parameterization, 0.0) == ParameterValue.zero()
        assert arc_length_to_parameter_value(parameterization, 0.1) is None

    def test_decreasing_table_rejected(self, spline, parameterization):
        with pytest.raises(ValueError, match="decrease"):
            parameterization.with_changes(arc_lengths=(0.0, 2.0, 1.0), parameter_values=(0.0, 0.5, 1.0))

    def test_table_must_span_unit_interval(self, parameterization):
        with pytest.raises(ValueError, match="from exactly 0 to exactly 1"):
            parameterization.with_changes(arc_lengths=(0.0, 1.0), parameter_values=(0.0, 0.9))

    def test_is_immutable(self, parameterization):
        with pytest.raises(Exception):
            parameterization.tolerance = 1.0

    def test_accuracy_against_reference(self, spline, parameterization):
        for t in (0.1, 0.37, 0.5, 0.81, 1.0):
            expected = reference_length(spline, t)
            assert parameter_value_to_arc_length(parameterization, t) == pytest.approx(expected, abs=TOLERANCE)

    def test_tighter_tolerance_uses_more_segments(self, spline):
        coarse = build(spline, 1e-2)
        fine = build(spline, 1e-6)
        assert fine.segment_count > coarse.segment_count
        assert fine.total == pytest.approx(coarse.total, abs=1e-2)


class TestQueries:
    """Tests for converting between parameter values and arc lengths."""

    def test_endpoints(self, parameterization):
        assert parameter_value_to_arc_length(parameterization, 0.0) == 0.0
        assert parameter_value_to_arc_length(parameterization, ParameterValue.one()) == parameterization.total
        assert arc_length_to_parameter_value(parameterization, 0.0) == ParameterValue.zero()
        end = arc_length_to_parameter_value(parameterization, parameterization.total)
        assert end.value == pytest.approx(1.0, abs=1e-12)

    def test_forward_is_nondecreasing(self, parameterization):
        lengths = [parameter_value_to_arc_length(parameterization, t) for t in ParameterValue.steps(997)]
        assert all(b >= a for a, b in zip(lengths, lengths[1:]))

    def test_round_trip(self, parameterization):
        total = parameterization.total
        for i in range(101):
            distance = total * i / 100
            t = arc_length_to_parameter_value(parameterization, distance)
            assert t is not None
            assert parameter_value_to_arc_length(parameterization, t) == pytest.approx(distance, abs=2 * TOLERANCE)

    def test_inverse_is_nondecreasing(self, parameterization):
        total = parameterization.total
        values = [arc_length_to_parameter_value(parameterization, total * i / 500).value for i in range(501)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("distance", [-1.0, -1e-6, 100.0, float('nan'), float('inf')])
    def test_out_of_range_distance(self, parameterization, distance):
        assert arc_length_to_parameter_value(parameterization, distance) is None

    def test_tiny_overshoot_at_end_is_accepted(self, parameterization):
        distance = parameterization.total * (1 + 1e-15)
        assert arc_length_to_parameter_value(parameterization, distance) is not None

    def test_parameter_out_of_range(self, parameterization):
        with pytest.raises(ValueError):
            parameter_value_to_arc_length(parameterization, 1.5)

    def test_quadratic(self):
        quadratic = QuadraticSpline2d.from_control_points([
            Point2d(x=0.0, y=0.0), Point2d(x=1.0, y=2.0), Point2d(x=2.0, y=0.0),
        ])
        parameterization = build(quadratic, TOLERANCE)
        # Symmetric curve: half the length is reached at t=0.5
        half = arc_length_to_parameter_value(parameterization, parameterization.total / 2)
        assert half.value == pytest.approx(0.5, abs=1e-4)


ZERO_SPEED_CURVES = {
    # Speed vanishes at t=0
    "coincident_start": lambda: CubicSpline2d.from_control_points([
        Point2d(x=0.0, y=0.0), Point2d(x=0.0, y=0.0), Point2d(x=1.0, y=2.0), Point2d(x=3.0, y=1.0),
    ]),
    # Speed vanishes at t=1
    "coincident_end": lambda: CubicSpline2d.from_control_points([
        Point2d(x=0.0, y=0.0), Point2d(x=1.0, y=2.0), Point2d(x=3.0, y=1.0), Point2d(x=3.0, y=1.0),
    ]),
    # Speed vanishes at t=0.5
    "interior_cusp": lambda: CubicSpline2d.from_control_points([
        Point2d(x=0.0, y=0.0), Point2d(x=2.0, y=1.0), Point2d(x=0.0, y=1.0), Point2d(x=2.0, y=0.0),
    ]),
    "quadratic": lambda: QuadraticSpline2d.from_control_points([
        Point2d(x=0.0, y=0.0), Point2d(x=1.0, y=2.0), Point2d(x=2.0, y=0.0),
    ]),
}


@pytest.fixture(params=sorted(ZERO_SPEED_CURVES))
def curve(request):
    return ZERO_SPEED_CURVES[request.param]()


@pytest.mark.parametrize("tolerance", [1e-2, 1e-5])
class TestQueriesNearZeroSpeed:
    """Inverse queries stay accurate and ordered where the curve momentarily stops."""

    def test_round_trip(self, curve, tolerance):
        parameterization = build(curve, tolerance)
        total = parameterization.total
        for i in range(201):
            distance = total * i / 200
            t = arc_length_to_parameter_value(parameterization, distance)
            assert t is not None
            assert parameter_value_to_arc_length(parameterization, t) == pytest.approx(distance, abs=1.5 * tolerance)

    def test_round_trip_close_to_the_ends(self, curve, tolerance):
        parameterization = build(curve, tolerance)
        total = parameterization.total
        for distance in (total * 1e-6, total * 1e-3, total * (1 - 1e-3), total * (1 - 1e-6)):
            t = arc_length_to_parameter_value(parameterization, distance)
            assert parameter_value_to_arc_length(parameterization, t) == pytest.approx(distance, abs=1.5 * tolerance)

    def test_inverse_is_nondecreasing(self, curve, tolerance):
        parameterization = build(curve, tolerance)
        total = parameterization.total
        values = [arc_length_to_parameter_value(parameterization, total * i / 500).value for i in range(501)]
        assert all(b >= a for a, b in zip(values, values[1:]))
        assert values[0] == 0.0
        assert values[-1] == pytest.approx(1.0, abs=1e-9)

    def test_forward_is_nondecreasing(self, curve, tolerance):
        parameterization = build(curve, tolerance)
        lengths = [parameter_value_to_arc_length(parameterization, t) for t in ParameterValue.steps(499)]
        assert all(b >= a for a, b in zip(lengths, lengths[1:]))


class TestInverseAccuracy:
    """The refined inverse lands on the true arc length, not just the table's."""

    @pytest.mark.parametrize("name", ["coincident_start", "coincident_end"])
    def test_matches_reference_length(self, name):
        curve = ZERO_SPEED_CURVES[name]()
        parameterization = build(curve, 1e-3)
        total = parameterization.total
        for fraction in (1e-4, 0.01, 0.3, 0.7, 0.99):
            t = arc_length_to_parameter_value(parameterization, total * fraction)
            assert reference_length(curve, t.value) == pytest.approx(total * fraction, abs=1e-6)
