"""
Review Sentiment Analysis
Run this on a CSV of scraped reviews (title, text, star, page).

Usage:
    python run_analysis.py <reviews.csv> [options]

Examples:
    python run_analysis.py data/reviews.csv
    python run_analysis.py data/reviews.csv --product-stop-words kindle,paperwhite
    python run_analysis.py data/reviews.csv --lookback 3 --constrain --plots
    python run_analysis.py data/reviews.csv --lexicon lexicons/bing.csv
"""
import os
import sys
import argparse
import logging
from dataclasses import replace

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # pylint: disable=wrong-import-position

from src.sentiment import PipelineConfig, SentimentPipeline  # pylint: disable=wrong-import-position
from src.sentiment.errors import SentimentAnalysisError  # pylint: disable=wrong-import-position
from src.sentiment.lexicons import (  # pylint: disable=wrong-import-position
    load_categorical_lexicon,
    load_signed_lexicon,
)
from src.sentiment import plots  # pylint: disable=wrong-import-position


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Compare lexicon-based sentiment scores with review star ratings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment overrides (.env supported):
  SENTIMENT_LANGUAGE, SENTIMENT_SPACY_MODEL, SENTIMENT_AMPLIFIER_WEIGHT,
  SENTIMENT_LOOKBACK, SENTIMENT_LOOKAHEAD, SENTIMENT_CONSTRAIN
        """
    )

    parser.add_argument("reviews_csv", help="CSV of scraped reviews")
    parser.add_argument("--output-dir", default="results/sentiment",
                        help="Directory for result tables and charts")
    parser.add_argument("--product-stop-words", default="",
                        help="Comma-separated product name words to drop")
    parser.add_argument("--lexicon",
                        help="Categorical lexicon CSV (word,sentiment) for bag-of-words scoring")
    parser.add_argument("--signed-lexicon",
                        help="Numeric lexicon CSV (word,value) for context-aware scoring")
    parser.add_argument("--amplifier-weight", type=float)
    parser.add_argument("--lookback", type=int)
    parser.add_argument("--lookahead", type=int)
    parser.add_argument("--constrain", action="store_true", default=None,
                        help="Let each modifier affect only its closest polarity term")
    parser.add_argument("--no-naive-bayes", action="store_true",
                        help="Skip the Naive Bayes comparison")
    parser.add_argument("--plots", action="store_true", help="Save PNG charts")
    parser.add_argument("-v", "--verbose", action="store_true")

    return parser.parse_args(argv)


def build_config(args) -> PipelineConfig:
    """Environment defaults overridden by command line flags"""
    config = PipelineConfig.from_env()
    overrides = {
        name: value for name, value in (
            ("amplifier_weight", args.amplifier_weight),
            ("lookback", args.lookback),
            ("lookahead", args.lookahead),
            ("constrain", args.constrain),
        ) if value is not None
    }
    product_words = [w.strip() for w in args.product_stop_words.split(",") if w.strip()]

    # replace() goes through __init__, so the overrides are validated
    return replace(
        config,
        context=replace(config.context, **overrides),
        cleaning=replace(config.cleaning, product_stop_words=frozenset(product_words)),
        run_naive_bayes=not args.no_naive_bayes,
    )


def save_results(results, output_dir, with_plots):
    """Write result tables (and optionally charts) to ``output_dir``"""
    os.makedirs(output_dir, exist_ok=True)

    results.table.to_csv(f"{output_dir}/documents.csv", index=False)
    results.metrics.to_csv(f"{output_dir}/metrics.csv", index=False)
    results.correlations.to_csv(f"{output_dir}/correlations.csv")
    results.bow_contributions.to_csv(f"{output_dir}/bow_word_contributions.csv", index=False)
    results.context_contributions.to_csv(
        f"{output_dir}/context_word_contributions.csv", index=False)
    for method, matrix in results.matrices.items():
        matrix.counts.to_csv(f"{output_dir}/confusion_{method}.csv")

    if not with_plots:
        return

    figures = {
        "bow_word_contributions": plots.plot_word_contributions(results.bow_contributions),
        "context_word_contributions": plots.plot_word_contributions(
            results.context_contributions, value_column='contribution', word_column='lemma'),
        "correlations": plots.plot_correlations(results.correlations),
    }
    for method, matrix in results.matrices.items():
        figures[f"confusion_{method}"] = plots.plot_confusion_matrix(matrix)
    for score_column in ('bow_score', 'context_score'):
        figures[f"{score_column}_by_star"] = plots.plot_score_by_star(results.table, score_column)

    for name, figure in figures.items():
        figure.savefig(f"{output_dir}/{name}.png", dpi=120)
        plt.close(figure)


def main():
    """Main function to run the review sentiment analysis."""
    args = parse_arguments()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not os.path.exists(args.reviews_csv):
        print(f"Error: Reviews CSV not found: {args.reviews_csv}")
        sys.exit(1)

    try:
        config = build_config(args)
        print("=== REVIEW SENTIMENT ANALYSIS ===")
        print(config.get_summary())

        categorical = load_categorical_lexicon(args.lexicon) if args.lexicon else None
        signed = load_signed_lexicon(args.signed_lexicon).signed() if args.signed_lexicon else None
        pipeline = SentimentPipeline(config, categorical_lexicon=categorical,
                                     signed_lexicon=signed)

        print(f"Running pipeline on {args.reviews_csv}...")
        results = pipeline.run_csv(args.reviews_csv)
    except (SentimentAnalysisError, FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("\n=== RESULTS ===")
    for key, value in results.stats.items():
        print(f"   {key}: {value}")

    print("\nMethod performance:")
    print(results.metrics.to_string(index=False))

    print("\nCorrelations:")
    print(results.correlations.to_string())

    save_results(results, args.output_dir, args.plots)
    print(f"\nResults saved to: {args.output_dir}")


if __name__ == "__main__":
    main()
