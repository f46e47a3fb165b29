"""Example: Exact derivatives of closed-form functions.

This example demonstrates:
- Building curried functions with operator overloading
- Symbolic derivatives of any order
- Gradient, Hessian, Laplacian and Jacobian at a point
"""

import logging

import numpy as np

from symdiff import (
    DifferentiationConfig,
    curry,
    diff,
    diffn,
    differentiate,
    exp,
    grad,
    hessian,
    jacobian,
    laplacian,
    sin,
    variables,
    vector,
)


def main():
    """Run derivatives example."""
    logging.basicConfig(level=logging.INFO)

    print("=" * 80)
    print("symdiff: Symbolic Differentiation")
    print("=" * 80)

    x, y = variables("x y")

    # =========================================================================
    # Step 1: Scalar functions
    # =========================================================================
    print("\n[Step 1] Scalar functions...")
    f = curry([x], sin(x) * exp(x))
    print(f"  f        = {f}")
    print(f"  f'       = {differentiate(x, f)}")
    print(f"  f'(0.5)  = {diff(f, 0.5):.6f}")
    print(f"  f'''(0.5)= {diffn(3, f, 0.5):.6f}")

    # =========================================================================
    # Step 2: Functions of several variables
    # =========================================================================
    print("\n[Step 2] Functions of several variables...")
    g = curry([x, y], x ** 2 * y + sin(y))
    point = [2.0, 3.0]
    print(f"  g          = {g}")
    print(f"  grad       = {grad(g, point)}")
    print(f"  laplacian  = {laplacian(g, point):.6f}")
    print(f"  hessian    =\n{np.array2string(hessian(g, point), prefix='    ')}")

    # =========================================================================
    # Step 3: Vector-valued functions
    # =========================================================================
    print("\n[Step 3] Vector-valued functions...")
    h = curry([x, y], vector(x * y, sin(x), x + y))
    print(f"  jacobian   =\n{jacobian(h, point)}")

    # =========================================================================
    # Step 4: Limits on derivative growth
    # =========================================================================
    print("\n[Step 4] Limits on derivative growth...")
    config = DifferentiationConfig(max_order=4, warn_tree_size=200)
    print(f"  f''''(0.5) = {diffn(4, f, 0.5, config):.6f}")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    main()
