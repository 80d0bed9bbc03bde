"""Post-processing adapter implementation."""

from __future__ import annotations

from docbench.application.options import NormalizeOptions
from docbench.linkify import linkify_html
from docbench.postprocess import (
    drop_leading_blank_lines,
    filter_noise_lines,
    normalize_whitespace,
)
from docbench.types import OutputFormat


class OutputPostProcessorImpl:
    """Default output normalization pipeline."""

    def run(
        self,
        content: str,
        output_format: OutputFormat,
        options: NormalizeOptions,
    ) -> str:
        """Filter noise, normalize whitespace and linkify HTML.

        Parameters
        ----------
        content : str
            Raw backend output.
        output_format : OutputFormat
            Format of ``content``; only ``html`` is linkified.
        options : NormalizeOptions
            Feature toggles.

        Returns
        -------
        str
            Normalized content.
        """
        if options.filter_noise:
            content = filter_noise_lines(content)
        content = "\n".join(drop_leading_blank_lines(content.split("\n")))
        content = normalize_whitespace(content)
        if output_format == "html" and options.linkify:
            content = linkify_html(content)
        return content
