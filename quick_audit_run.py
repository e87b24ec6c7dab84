"""
quick_audit_run.py
Save a first look at the raw dataset into reports/ (head, info, describe,
class distribution).
"""

from personality.config import RAW_CSV, REPORTS_DIR, TARGET
from personality.load_data import load_data
from personality.utils import save_initial_audit


def main():
    df_raw = load_data(RAW_CSV)
    paths = save_initial_audit(df_raw, REPORTS_DIR, target_col=TARGET)
    print(f"Loaded {len(df_raw)} rows x {df_raw.shape[1]} columns from {RAW_CSV}")
    print("Initial audit saved:", ", ".join(paths.values()))


if __name__ == "__main__":
    main()
