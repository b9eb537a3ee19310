from pathlib import Path
import matplotlib.pyplot as plt

from pi_collision.core.engine import calculate
from pi_collision.core.render import plot_trajectory, write_svg


def main():
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(exist_ok=True)

    seq = calculate(10_000.0)
    print(f"Number of collisions: {seq.count()}")

    with (out_dir / "m1e4.svg").open("w", encoding="utf-8") as f:
        write_svg(seq, f)

    df = seq.to_dataframe()
    E0 = 0.5 * seq.mass_big
    rel_err = (df["kinetic_energy"] - E0).abs().max() / E0
    print(f"Max relative energy error: {rel_err:.3e}")

    plot_trajectory(seq)
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
