"""
run_preprocess.py
Clean the raw dataset (median / mode imputation), encode the Yes/No flags and
save the cleaned and processed CSVs.
"""

from personality.config import RAW_CSV, PROCESSED_DIR
from personality.preprocess import run_preprocess


def main():
    s = run_preprocess(csv_path=RAW_CSV, out_base=PROCESSED_DIR)
    print("Preprocessing complete.")
    print(f"- cleaned={s['cleaned_csv']}, processed={s['processed_csv']}, rows={s['n_rows']}, "
          f"cols={s['n_columns']}, log={s['log']}")


if __name__ == "__main__":
    main()
