"""
Tests for the exponential / logarithm engine.

Tests cover:
- exp / ln round trips for screws, translations and rotations
- Degenerate branches (identity, pure translation, zero generators)
- Real powers, square roots and the double cover
- Batched inputs and tensor exponents
"""

import pytest
import torch
import math

from pga_kernel.pga.algebra import Scalar, cast, transformation
from pga_kernel.pga.primitives import Point, Dir, Branch, IdealLine, Line
from pga_kernel.pga.motors import Rotor, Translator, Motor
from pga_kernel.pga.exp_log import (
    exp,
    ln,
    powf,
    sqrt,
    scalar_part,
    constrain,
    _acos,
)
from pga_kernel.pga.transforms import point_to_cartesian
from pga_kernel.utils.config import Config, set_config


# =============================================================================
# Screw Motions
# =============================================================================

class TestMotorExpLn:
    """Tests for exp(Line) and ln(Motor)."""

    def test_exp_returns_motor(self, screw_line):
        assert isinstance(exp(screw_line), Motor)

    def test_ln_returns_line(self, screw_motor):
        assert isinstance(ln(screw_motor), Line)

    def test_exp_ln_roundtrip(self, screw_motor, atol):
        assert exp(ln(screw_motor)).allclose(screw_motor, atol=atol)

    def test_ln_exp_roundtrip(self, screw_line, atol):
        assert ln(exp(screw_line)).allclose(screw_line, atol=atol)

    def test_exp_gives_unit_motor(self, screw_line, atol):
        m = exp(screw_line)
        assert (m * ~m).allclose(Motor.one(), atol=atol)

    def test_exp_of_zero_line_is_identity(self):
        assert torch.equal(exp(Line.zero()).components, Motor.one().components)

    def test_exp_of_ideal_line_is_translation(self):
        """A line with zero direction exponentiates to (1, 0, 0, 0, 0, moment)."""
        m = exp(Line.new(0.0, 0.0, 0.0, 1.0, 2.0, 3.0))
        expected = torch.tensor([1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 2.0, 3.0])
        assert torch.allclose(m.components, expected)

    def test_ln_of_pure_translation(self):
        """Pure translations have a zero direction and the ideal part as moment."""
        line = ln(cast(Translator.new(2.0, 4.0, 6.0), Motor))
        expected = torch.tensor([0.0, 0.0, 0.0, -1.0, -2.0, -3.0])
        assert torch.allclose(line.components, expected)

    def test_ln_of_identity_is_zero(self):
        assert torch.allclose(ln(Motor.one()).components, torch.zeros(6))

    def test_rotation_about_offset_axis(self, atol):
        """Half a turn about the vertical line through (1, 0, 0)."""
        axis = Line.from_points(Point.at(1.0, 0.0, 0.0), Point.at(1.0, 0.0, 1.0))
        generator = axis / axis.magnitude()
        motor = exp(generator * (math.pi / 2))
        moved = transformation(motor, Point.origin())
        assert torch.allclose(point_to_cartesian(moved), torch.tensor([2.0, 0.0, 0.0]), atol=atol)

    def test_batched_roundtrip(self):
        torch.manual_seed(0)
        direction = torch.randn(16, 3, dtype=torch.float64) * 0.5
        moment = torch.randn(16, 3, dtype=torch.float64)
        lines = Line.from_direction_moment(direction, moment)
        back = ln(exp(lines))
        assert back.components.shape == (16, 6)
        assert torch.allclose(back.components, lines.components, atol=1e-8)


class TestMotorPowers:
    """Tests for powf(Motor, e)."""

    def test_power_zero_is_identity(self, screw_motor):
        assert torch.equal(powf(screw_motor, 0.0).components, Motor.one().components)

    def test_power_one_is_motor(self, screw_motor, atol):
        assert powf(screw_motor, 1.0).allclose(screw_motor, atol=atol)

    def test_sqrt_squared(self, screw_motor, atol):
        root = sqrt(screw_motor)
        assert (root * root).allclose(screw_motor, atol=atol)

    def test_powers_add(self, screw_motor, atol):
        a = powf(screw_motor, 0.3)
        b = powf(screw_motor, 0.5)
        assert (a * b).allclose(powf(screw_motor, 0.8), atol=atol)

    def test_tensor_exponent(self, screw_motor, atol):
        t = torch.tensor([0.0, 0.5, 1.0])
        powers = powf(screw_motor, t)
        assert powers.components.shape == (3, 8)
        assert torch.allclose(powers.components[0], Motor.one().components, atol=atol)
        assert torch.allclose(powers.components[2], screw_motor.components, atol=atol)


# =============================================================================
# Translations
# =============================================================================

class TestTranslatorExpLn:
    """Tests for exp(IdealLine) and ln(Translator)."""

    def test_exp(self):
        t = exp(IdealLine.new(1.0, 2.0, 3.0))
        assert isinstance(t, Translator)
        assert torch.allclose(t.components, torch.tensor([1.0, 1.0, 2.0, 3.0]))

    def test_ln_divides_by_scalar(self):
        line = ln(Translator(torch.tensor([2.0, 2.0, 4.0, 6.0])))
        assert isinstance(line, IdealLine)
        assert torch.allclose(line.components, torch.tensor([1.0, 2.0, 3.0]))

    def test_powf_scales_translation(self):
        t = powf(Translator.new(2.0, 0.0, 0.0), 0.5)
        assert torch.allclose(t.components, torch.tensor([1.0, -0.5, 0.0, 0.0]))

    def test_sqrt(self):
        assert sqrt(Translator.new(2.0, 4.0, 6.0)).allclose(Translator.new(1.0, 2.0, 3.0))


# =============================================================================
# Rotations
# =============================================================================

class TestRotorExpLn:
    """Tests for exp(Branch), ln(Rotor) and powf(Rotor, e)."""

    def test_exp_of_zero_branch_is_identity(self):
        assert torch.equal(exp(Branch.zero()).components, Rotor.one().components)

    def test_exp_of_branch(self, quarter_turn_z):
        r = exp(Branch.new(0.0, 0.0, math.pi / 4))
        assert isinstance(r, Rotor)
        assert r.allclose(quarter_turn_z)

    def test_ln_of_rotor(self, quarter_turn_z):
        b = ln(quarter_turn_z)
        assert isinstance(b, Branch)
        assert b.allclose(Branch.new(0.0, 0.0, math.pi / 4))

    def test_ln_of_identity_is_zero_branch(self):
        assert torch.equal(ln(Rotor.one()).components, torch.zeros(3))

    def test_ln_of_negative_scalar_rotor_is_zero_branch(self):
        b = ln(Rotor.new(0.0, 0.0, 0.0, -1.0))
        assert torch.equal(b.components, torch.zeros(3))

    def test_ln_of_zero_rotor_is_zero_branch(self):
        b = ln(Rotor.zero())
        assert not torch.isnan(b.components).any()
        assert torch.equal(b.components, torch.zeros(3))

    def test_ln_of_non_unit_rotor(self, quarter_turn_z):
        """The logarithm only sees the normalized rotor."""
        b = ln(quarter_turn_z * 3.0)
        assert b.allclose(Branch.new(0.0, 0.0, math.pi / 4))

    def test_powf_of_scalar_rotor(self):
        r = powf(Rotor.new(0.0, 0.0, 0.0, 4.0), 0.5)
        assert torch.allclose(r.components, torch.tensor([2.0, 0.0, 0.0, 0.0]))

    def test_powf_halves_angle(self, quarter_turn_z):
        eighth_turn = Rotor.from_angle_axis(math.pi / 4, Dir.new(0.0, 0.0, 1.0))
        assert powf(quarter_turn_z, 0.5).allclose(eighth_turn)

    def test_powf_tensor_exponent(self, quarter_turn_z):
        r = powf(quarter_turn_z, torch.tensor([0.0, 1.0, 2.0]))
        assert r.components.shape == (3, 4)
        assert torch.allclose(r.components[1], quarter_turn_z.components, atol=1e-6)

    def test_double_cover(self):
        """A half turn squared is -1, which constrains back to identity."""
        half_turn = Rotor.from_angle_axis(math.pi, Dir.new(0.0, 0.0, 1.0))
        full_turn = powf(half_turn, 2.0)
        assert full_turn.scalar.item() == pytest.approx(-1.0, abs=1e-5)
        assert constrain(full_turn).allclose(Rotor.one())


# =============================================================================
# Scalars
# =============================================================================

class TestScalarExpLn:
    """Scalars use the real functions."""

    def test_exp(self):
        assert exp(Scalar.new(0.0)).value.item() == pytest.approx(1.0)

    def test_ln(self):
        assert ln(Scalar.new(math.e)).value.item() == pytest.approx(1.0)

    def test_powf(self):
        assert powf(Scalar.new(9.0), 0.5).value.item() == pytest.approx(3.0)


# =============================================================================
# Helpers and Errors
# =============================================================================

class TestHelpers:
    """Tests for scalar_part, constrain, dispatch errors and clamping."""

    def test_scalar_part(self, screw_motor):
        s = scalar_part(screw_motor)
        assert isinstance(s, Scalar)
        assert s.value.item() == pytest.approx(math.cos(0.5), abs=1e-6)

    def test_scalar_part_requires_scalar_blade(self):
        with pytest.raises(TypeError):
            scalar_part(Point.at(1.0, 2.0, 3.0))

    def test_constrain_negates(self):
        g = Rotor.new(0.1, 0.2, 0.3, -0.5)
        assert torch.allclose(constrain(g).components, -g.components)

    def test_constrain_keeps_positive(self, screw_motor):
        assert torch.equal(constrain(screw_motor).components, screw_motor.components)

    def test_constrain_batched(self):
        g = Rotor(torch.tensor([[0.5, 1.0, 0.0, 0.0], [-0.5, 1.0, 0.0, 0.0]]))
        expected = torch.tensor([[0.5, 1.0, 0.0, 0.0], [0.5, -1.0, 0.0, 0.0]])
        assert torch.equal(constrain(g).components, expected)

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError, match="exp is not defined for Point"):
            exp(Point.at(1.0, 2.0, 3.0))
        with pytest.raises(TypeError, match="ln is not defined for Line"):
            ln(Line.zero())
        with pytest.raises(TypeError):
            powf(Branch.zero(), 2.0)

    def test_acos_clamped_by_default(self):
        assert _acos(torch.tensor(1.0 + 1e-6)).item() == 0.0

    def test_acos_unclamped(self):
        set_config(Config(clamp_domain=False))
        assert torch.isnan(_acos(torch.tensor(1.0 + 1e-6)))

    def test_ln_rotor_clamped_by_default(self):
        """Rounding can push scalar / |R| past 1; the clamp keeps ln finite."""
        # 3 * 2^-75 squared rounds down into the subnormal range, so |R| < scalar
        rotor = Rotor(torch.tensor([3.0 * 2.0 ** -75, 2.0 ** -100, 0.0, 0.0]))
        b = ln(rotor)
        assert torch.isfinite(b.components).all()

    def test_ln_rotor_unclamped(self):
        set_config(Config(clamp_domain=False))
        rotor = Rotor(torch.tensor([3.0 * 2.0 ** -75, 2.0 ** -100, 0.0, 0.0]))
        assert torch.isnan(ln(rotor).components[0])

    @pytest.mark.parametrize("clamp", [True, False])
    def test_ln_motor_past_one_is_translation(self, clamp):
        """A scalar part above 1 takes the translation branch in either mode."""
        set_config(Config(clamp_domain=clamp))
        motor = Motor(torch.tensor([1.001, 0.01, 0.0, 0.0, 0.0, 1.0, 2.0, 3.0]))
        line = ln(motor)
        expected = torch.tensor([0.0, 0.0, 0.0, 1.0, 2.0, 3.0])
        assert torch.allclose(line.components, expected)


# =============================================================================
# Gradients
# =============================================================================

class TestGradients:
    """Backpropagation through the degenerate branches stays finite."""

    def test_exp_of_zero_branch(self):
        x = torch.zeros(3, requires_grad=True)
        exp(Branch(x)).components.sum().backward()
        assert torch.isfinite(x.grad).all()
        assert torch.allclose(x.grad, torch.ones(3))

    def test_exp_of_zero_line(self):
        x = torch.zeros(6, requires_grad=True)
        exp(Line(x)).components.sum().backward()
        assert torch.isfinite(x.grad).all()

    def test_powf_of_identity_motor(self):
        x = Motor.one().components.clone().requires_grad_()
        powf(Motor(x), 0.5).components.sum().backward()
        assert torch.isfinite(x.grad).all()

    def test_ln_of_identity_rotor(self):
        x = Rotor.one().components.clone().requires_grad_()
        ln(Rotor(x)).components.sum().backward()
        assert torch.isfinite(x.grad).all()

    def test_ln_of_zero_rotor(self):
        x = torch.zeros(4, requires_grad=True)
        ln(Rotor(x)).components.sum().backward()
        assert torch.isfinite(x.grad).all()

    def test_sqrt_of_batch_with_identity(self, screw_motor):
        batch = torch.stack([Motor.one().components, screw_motor.components])
        x = batch.clone().requires_grad_()
        sqrt(Motor(x)).components.sum().backward()
        assert torch.isfinite(x.grad).all()
