"""
run_prepare_inputs.py
Create the stratified 80/20 train/test split of the processed dataset.
Run this from the project root.
"""

from personality.config import TEST_SIZE, SEED
from personality.prepare_inputs import prepare_inputs


def main():
    s = prepare_inputs(test_size=TEST_SIZE, seed=SEED)
    print("Prepared modelling inputs:")
    print(f"- n_train={s['n_train']}, n_test={s['n_test']}, X_train={s['X_train']}, y_train={s['y_train']}")
    for part, props in s["class_proportions"].items():
        print(f"  {part}: " + ", ".join(f"{k}={v:.3f}" for k, v in props.items()))


if __name__ == "__main__":
    main()
