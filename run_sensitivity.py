"""
run_sensitivity.py
Sweep decision cutoffs for each model's test-set probabilities and write the
model comparison paragraph.

Produces:
- reports/results/<model>_cutoff_performance.csv
- reports/figs/<model>_cutoff_tradeoff.png
- reports/results/model_comparison.txt
"""

from personality.config import CUTOFFS
from personality.sensitivity import run_cutoff_sweep, compare_models


def main():
    tables = run_cutoff_sweep(cutoffs=CUTOFFS)
    print(f"Cutoff tables saved for: {', '.join(tables)}")
    para = compare_models()
    print("Model comparison paragraph saved.")
    print(para)


if __name__ == "__main__":
    main()
