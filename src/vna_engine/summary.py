"""Short structural report of a parsed composition."""

from __future__ import annotations

from dataclasses import dataclass, field

from vna_engine.notation.models import Document, resolve_gati, resolve_tala, tala_pattern_name

DEFAULT_TEMPO = 60


@dataclass
class SectionSummary:
    name: str
    line_number: int
    phrase_count: int
    token_count: int
    gati: int | None
    tala: str


@dataclass
class DocumentSummary:
    """Headline metadata plus per-section counts.

    ``gati`` and ``tala`` of each section are the effective values after
    section and document overrides; ``tempo`` falls back to 60 BPM.
    """

    title: str
    raga: str
    tala: str
    tala_name: str | None
    tempo: int
    composer: str | None = None
    language: str | None = None
    sections: list[SectionSummary] = field(default_factory=list)

    @property
    def phrase_count(self) -> int:
        return sum(s.phrase_count for s in self.sections)

    @property
    def token_count(self) -> int:
        return sum(s.token_count for s in self.sections)


def summarize(document: Document) -> DocumentSummary:
    meta = document.metadata
    sections = [
        SectionSummary(
            name=section.name,
            line_number=section.line_number,
            phrase_count=len(section.phrases),
            token_count=sum(len(p.swaras) for p in section.phrases),
            gati=resolve_gati(document, section),
            tala=resolve_tala(document, section),
        )
        for section in document.sections
    ]
    return DocumentSummary(
        title=meta.title,
        raga=meta.raga,
        tala=meta.tala,
        tala_name=tala_pattern_name(meta.tala),
        tempo=meta.tempo if meta.tempo is not None else DEFAULT_TEMPO,
        composer=meta.composer,
        language=meta.language,
        sections=sections,
    )


def render_summary(summary: DocumentSummary) -> str:
    """Render a summary as a multi-line text report."""
    tala = f"{summary.tala} ({summary.tala_name})" if summary.tala_name else summary.tala
    lines = [
        f"Title: {summary.title}",
        f"Raga: {summary.raga}",
        f"Tala: {tala}",
        f"Tempo: {summary.tempo} BPM",
    ]
    if summary.composer:
        lines.append(f"Composer: {summary.composer}")
    if summary.language:
        lines.append(f"Language: {summary.language}")

    lines.append("")
    lines.append("Structure:")
    for section in summary.sections:
        gati = f", gati {section.gati}" if section.gati is not None else ""
        lines.append(f"  {section.name}: {section.phrase_count} phrases{gati}")
    lines.append(f"  total: {summary.phrase_count} phrases, {summary.token_count} tokens")
    return "\n".join(lines)
