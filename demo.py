"""
AVL Tree Demo -- Rotation scenarios, seeded verification run, fixup statistics
and height against the AVL worst-case bound.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
import math
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from avl_tree import AVLTree, DuplicateKeyError
from avl_driver import SEED, KEY_COUNT, KEY_UPPER_BOUND, random_keys, run

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "LL": "#3498db",
    "LR": "#e74c3c",
    "RR": "#27ae60",
    "RL": "#f39c12",
    "bound": "#2c3e50",
    "optimal": "#9b59b6",
}

ORDERS = ["ascending", "descending", "random"]


def describe(node, depth=0):
    if node is None:
        return []
    return (describe(node.right, depth + 1)
            + [f"{'    ' * depth}{node.key} (bf={node.bf:+d})"]
            + describe(node.left, depth + 1))


def avl_bound(n):
    return math.ceil(1.4405 * math.log2(n + 2))


def keys_in_order(order, n, rng):
    if order == "ascending":
        return list(range(1, n + 1))
    if order == "descending":
        return list(range(n, 0, -1))
    return [int(k) for k in rng.permutation(np.arange(1, n + 1))]


# ---------------------------------------------------------------------------
# Example 1: The four rebalancing cases
# ---------------------------------------------------------------------------
def example_1_rotation_scenarios():
    """Insert three keys in each order that triggers one fixup case."""
    print("=" * 60)
    print("Example 1: Rebalancing Cases")
    print("=" * 60)

    scenarios = {
        "LL": [30, 20, 10],
        "LR": [30, 10, 20],
        "RR": [10, 20, 30],
        "RL": [10, 30, 20],
    }

    for case, keys in scenarios.items():
        tree = AVLTree()
        for k in keys:
            tree.insert(k)
        tree.verify()
        fired = [c for c, n in tree.fixup_counts().items() if n]
        print(f"\nInsert {keys} -> fixup {fired}")
        for line in describe(tree.root):
            print(f"  {line}")

    tree = AVLTree()
    tree.insert(5)
    try:
        tree.insert(5)
    except DuplicateKeyError as e:
        print(f"\nDuplicate insert rejected: {e}; size is still {len(tree)}")

    return {"scenarios": scenarios}


# ---------------------------------------------------------------------------
# Example 2: Seeded driver run
# ---------------------------------------------------------------------------
def example_2_seeded_run():
    """Same workload as the command-line driver."""
    print("\n" + "=" * 60)
    print("Example 2: Seeded Random Insertion and Verification")
    print("=" * 60)
    print(f"Seed {SEED}, {KEY_COUNT} keys drawn from [0, {KEY_UPPER_BOUND})")

    keys = random_keys()
    print(f"First keys: {keys[:10]}")
    print(f"Distinct keys: {len(set(keys))}, repeats expected to be rejected: {len(keys) - len(set(keys))}")
    print()

    status = run()
    print(f"Exit status: {status}")
    return {"status": status}


# ---------------------------------------------------------------------------
# Example 3: Fixup statistics per insertion order
# ---------------------------------------------------------------------------
def example_3_fixup_statistics():
    """Count fixups of each kind for sorted, reversed and shuffled keys."""
    print("\n" + "=" * 60)
    print("Example 3: Fixup Counts by Insertion Order")
    print("=" * 60)

    n = 1000
    rng = np.random.RandomState(SEED)
    counts = {}
    for order in ORDERS:
        tree = AVLTree()
        for k in keys_in_order(order, n, rng):
            tree.insert(k)
        tree.verify()
        counts[order] = tree.fixup_counts()
        total = sum(counts[order].values())
        print(f"{order:>10}: {counts[order]} total={total} height={tree.height()}")

    fig, ax = plt.subplots(figsize=(10, 6))
    width = 0.2
    x = np.arange(len(ORDERS))
    for i, case in enumerate(AVLTree.FIXUP_CASES):
        values = [counts[order][case] for order in ORDERS]
        ax.bar(x + (i - 1.5) * width, values, width, label=case, color=COLORS[case])

    ax.set_xticks(x)
    ax.set_xticklabels(ORDERS)
    ax.set_ylabel("Fixups", fontsize=12)
    ax.set_title(f"Fixup Cases While Inserting {n} Keys", fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3, axis="y")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_fixup_counts.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '01_fixup_counts.png'}")
    return {"counts": counts, "n": n}


# ---------------------------------------------------------------------------
# Example 4: Height against the AVL bound
# ---------------------------------------------------------------------------
def example_4_height_bound():
    """Track tree height while inserting and compare with 1.4405 log2(n + 2)."""
    print("\n" + "=" * 60)
    print("Example 4: Height vs. AVL Worst-Case Bound")
    print("=" * 60)

    n = 5000
    sizes = np.arange(1, n + 1)
    bound = np.array([avl_bound(s) for s in sizes])
    optimal = np.ceil(np.log2(sizes + 1))

    rng = np.random.RandomState(SEED)
    heights = {}
    for order in ("ascending", "random"):
        tree = AVLTree()
        trace = []
        for k in keys_in_order(order, n, rng):
            tree.insert(k)
            trace.append(_root_height(tree))
        assert trace[-1] == tree.height()
        heights[order] = np.array(trace)
        worst = int(np.max(heights[order] - bound))
        print(f"{order:>10}: final height {heights[order][-1]}, "
              f"bound {bound[-1]}, max(height - bound) = {worst}")

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(sizes, bound, color=COLORS["bound"], linestyle="--", label="AVL bound")
    ax.plot(sizes, optimal, color=COLORS["optimal"], linestyle=":", label="ceil(log2(n + 1))")
    ax.plot(sizes, heights["ascending"], color=COLORS["RR"], label="ascending keys")
    ax.plot(sizes, heights["random"], color=COLORS["LR"], label="random keys", alpha=0.8)
    ax.set_xscale("log")
    ax.set_xlabel("Keys in tree", fontsize=12)
    ax.set_ylabel("Height", fontsize=12)
    ax.set_title("AVL Tree Height During Insertion", fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_height_bound.png", dpi=150)
    plt.close(fig)

    print(f"Saved: {VIZ_DIR / '02_height_bound.png'}")
    return {"final": {o: int(h[-1]) for o, h in heights.items()}, "bound": int(bound[-1]), "n": n}


def _root_height(tree):
    # walk the heavier side down from the root; balance factors say which one is taller
    h = 0
    node = tree.root
    while node is not None:
        h += 1
        node = node.left if node.bf >= 0 else node.right
    return h


def generate_pdf_report(results):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = Path(__file__).parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")

        ax.text(0.5, 0.7, "AVL Tree\nDemo Report", transform=ax.transAxes, fontsize=28,
                ha="center", va="center", fontweight="bold")

        description = (
            "Insert-only AVL tree with stored balance factors.\n"
            "Each insertion walks up from the new leaf adjusting balance factors\n"
            "and applies at most one single or double rotation."
        )
        ax.text(0.5, 0.45, description, transform=ax.transAxes, fontsize=14,
                ha="center", va="center", style="italic")

        ax.text(0.5, 0.2, f"Random Seed: {SEED}", transform=ax.transAxes, fontsize=12,
                ha="center", va="center")

        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")

        ax.text(0.5, 0.95, "Summary of Results", transform=ax.transAxes, fontsize=20,
                ha="center", va="top", fontweight="bold")

        counts = results["ex3"]["counts"]
        summary_text = f"""
Example 1: Rebalancing Cases
    - Scenarios: {', '.join(results['ex1']['scenarios'])}

Example 2: Seeded Verification Run
    - Exit status: {results['ex2']['status']}

Example 3: Fixup Counts ({results['ex3']['n']} keys)
    - ascending:  {counts['ascending']}
    - descending: {counts['descending']}
    - random:     {counts['random']}

Example 4: Height Bound ({results['ex4']['n']} keys)
    - ascending final height: {results['ex4']['final']['ascending']}
    - random final height:    {results['ex4']['final']['random']}
    - AVL bound:              {results['ex4']['bound']}
"""
        ax.text(0.1, 0.85, summary_text, transform=ax.transAxes, fontsize=11,
                ha="left", va="top", family="monospace")

        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        for viz_file in sorted(VIZ_DIR.glob("*.png")):
            fig, ax = plt.subplots(figsize=(11, 8.5))
            img = plt.imread(viz_file)
            ax.imshow(img)
            ax.axis("off")
            ax.set_title(viz_file.stem.replace("_", " ").title(), fontsize=14, fontweight="bold")
            fig.tight_layout()
            pdf.savefig(fig)
            plt.close(fig)

    print(f"Saved: {pdf_path}")


def main():
    print("AVL Tree Demo")
    print("=" * 60)
    print(f"Random seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")
    print()

    results = {}

    results["ex1"] = example_1_rotation_scenarios()
    results["ex2"] = example_2_seeded_run()
    results["ex3"] = example_3_fixup_statistics()
    results["ex4"] = example_4_height_bound()

    generate_pdf_report(results)

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)
    print(f"Visualizations saved to: {VIZ_DIR}")
    print(f"PDF report saved to: {Path(__file__).parent / 'report.pdf'}")


if __name__ == "__main__":
    main()
