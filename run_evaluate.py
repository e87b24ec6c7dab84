"""
run_evaluate.py
Refit both models with their cross-validated parameters and evaluate them on
the reserved test set. Run after run_tune.py.
"""

from personality.evaluate import evaluate_models


def main():
    results = evaluate_models()
    print("Final evaluation completed. Summary:")
    for r in results:
        print(f"- {r['model']}: params={r['params']}, auc={r['auc']:.4f}, f1={r['f1']:.4f}, "
              f"acc={r['accuracy']:.4f}, cm={r['confusion_matrix_png']}")


if __name__ == "__main__":
    main()
