"""Matplotlib-based chart helpers for YiieldLab."""

from __future__ import annotations

import pandas as pd

from ..scoring.tiers import UNKNOWN_STYLE, rating_style


class Visualizer:
    """Collection of static helpers that turn scored pools into charts."""

    @staticmethod
    def _plt():
        try:
            import matplotlib.pyplot as plt
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "matplotlib is required for visualization. Install via pip."
            ) from exc
        return plt

    @staticmethod
    def bar_rating_distribution(
        df_rating: pd.DataFrame,
        title: str = "Pools per security rating",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Bar chart of :meth:`Metrics.rating_distribution` output."""
        if df_rating.empty:
            return
        plt = Visualizer._plt()
        ratings = df_rating["security_rating"].tolist()
        plt.figure(figsize=(8, 5))
        plt.bar(
            [rating_style(r).label for r in ratings],
            df_rating["pools"],
            color=[rating_style(r).color for r in ratings],
        )
        plt.title(title)
        plt.ylabel("Pools")
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()

    @staticmethod
    def scatter_tvl_apy(
        df: pd.DataFrame,
        title: str = "TVL vs. APY",
        x_col: str = "tvl_usd",
        y_col: str = "apy",
        annotate: bool = False,
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Scatter TVL against APY, colouring each pool by its security rating."""
        if df.empty:
            return
        colors = [UNKNOWN_STYLE.color] * len(df)
        if "security_rating" in df.columns:
            colors = [rating_style(r).color for r in df["security_rating"]]
        plt = Visualizer._plt()
        plt.figure(figsize=(10, 6))
        plt.scatter(df[x_col], df[y_col] * 100.0, c=colors)  # % on y-axis
        if annotate:
            for _, row in df.iterrows():
                plt.annotate(
                    str(row.get("name", "")),
                    (row[x_col], row[y_col] * 100.0),
                    textcoords="offset points",
                    xytext=(5, 5),
                )
        plt.xscale("log")
        plt.xlabel("TVL (USD, log-scale)")
        plt.ylabel("APY (%)")
        plt.title(title)
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()

    @staticmethod
    def bar_group_chain(
        df_group: pd.DataFrame,
        title: str = "TVL-weighted APY per chain",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        if df_group.empty:
            return
        plt = Visualizer._plt()
        plt.figure(figsize=(8, 5))
        plt.bar(df_group["chain"], df_group["apy_wavg"] * 100.0)
        plt.title(title)
        plt.ylabel("TVL-weighted APY (%)")
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()


__all__ = ["Visualizer"]
