"""
Plotting script for bot evaluation results.
Generates score/length plots and a policy comparison from the evaluation CSVs.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from typing import Dict, Optional

COLORS = {"bot": "#2ecc71", "random": "#e74c3c"}


def load_eval(log_dir: str, policy: str) -> Optional[pd.DataFrame]:
    """Load the per-episode CSV written by rl/evaluate.py"""
    csv_path = os.path.join(log_dir, f"{policy}_eval.csv")
    if os.path.exists(csv_path):
        return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_policy(df: pd.DataFrame, policy: str, output_dir: str, window: int = 5) -> str:
    """Plot score and length per episode for a single policy."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    fig.suptitle(f"{policy.upper()} Evaluation", fontsize=16, fontweight="bold")

    scores = df["score"].values
    color = COLORS.get(policy)

    ax = axes[0]
    ax.plot(df["episode"].values, scores, alpha=0.4, color=color)
    smoothed = smooth(scores, window)
    ax.plot(df["episode"].values[len(scores) - len(smoothed):], smoothed, linewidth=2, color=color)
    ax.set_xlabel("Episode")
    ax.set_ylabel("Score")
    ax.set_title("Score per Episode")
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.plot(df["episode"].values, df["length"].values, linewidth=2, color="orange")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Ticks survived")
    ax.set_title("Episode Length")
    ax.grid(True, alpha=0.3)

    ax = axes[2]
    ax.hist(scores, bins=max(5, int(scores.max()) + 1), alpha=0.7, edgecolor="black", color=color)
    ax.axvline(np.mean(scores), color="black", linestyle="--", label=f"Mean: {np.mean(scores):.2f}")
    ax.set_xlabel("Score")
    ax.set_ylabel("Frequency")
    ax.set_title("Score Distribution")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{policy}_eval.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {policy} evaluation plot to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str) -> str:
    """Box plots of score and length for every loaded policy."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Policy Comparison", fontsize=16, fontweight="bold")

    policies = [p for p, df in data.items() if df is not None and len(df) > 0]
    for ax, column, label in zip(axes, ["score", "length"], ["Score", "Ticks survived"]):
        bp = ax.boxplot([data[p][column].values for p in policies], patch_artist=True)
        ax.set_xticks(range(1, len(policies) + 1))
        ax.set_xticklabels([p.upper() for p in policies])
        for patch, policy in zip(bp["boxes"], policies):
            patch.set_facecolor(COLORS.get(policy, "#888888"))
            patch.set_alpha(0.6)
        ax.set_ylabel(label)
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "policy_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str) -> str:
    """Generate a text summary report."""
    report_lines = [
        "=" * 60,
        "BOT EVALUATION SUMMARY REPORT",
        "=" * 60,
        "",
    ]

    for policy, df in data.items():
        if df is not None and len(df) > 0:
            report_lines.append(f"\n{policy.upper()} Results:")
            report_lines.append("-" * 40)
            report_lines.append(f"  Episodes: {len(df)}")
            report_lines.append(f"  Mean Score: {df['score'].mean():.2f} ± {df['score'].std(ddof=0):.2f}")
            report_lines.append(f"  Max Score: {df['score'].max()}")
            report_lines.append(f"  Mean Episode Length: {df['length'].mean():.1f}")
            report_lines.append(f"  Survived to time limit: {df['truncated'].mean():.2%}")

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "eval_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot bot evaluation results")
    parser.add_argument(
        "--log-dir",
        type=str,
        default="./logs/eval",
        help="Directory containing evaluation CSV files",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./plots",
        help="Directory to save plots",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=5,
        help="Smoothing window size (default: 5)",
    )
    parser.add_argument(
        "--policies",
        nargs="+",
        default=["bot", "random"],
        help="Policies to plot",
    )

    args = parser.parse_args()

    print(f"Loading evaluation results from {args.log_dir}...")

    data = {}
    for policy in args.policies:
        df = load_eval(args.log_dir, policy)
        if df is not None:
            print(f"  Loaded {policy}: {len(df)} episodes")
        else:
            print(f"  No data found for {policy}")
        data[policy] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Run rl/evaluate.py first.")
        return

    for policy, df in data.items():
        if df is not None:
            plot_policy(df, policy, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir)

    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
