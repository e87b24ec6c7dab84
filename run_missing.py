"""
run_missing.py
Run only the missing-value report and heuristic assessment.
"""

import os

from personality.config import RAW_CSV, REPORTS_DIR, TARGET
from personality.load_data import load_data
from personality.missing import save_missing_report, heuristic_missingness_assessment
from personality.utils import save_text


def main():
    df = load_data(RAW_CSV)
    csv_path = save_missing_report(df, REPORTS_DIR)
    note = heuristic_missingness_assessment(df, target_col=TARGET, threshold_pct=5.0)
    save_text(os.path.join(REPORTS_DIR, "missing_assessment.txt"), note + "\n")
    print("Missing report saved to:", csv_path)
    print("Missingness assessment:", note)


if __name__ == "__main__":
    main()
