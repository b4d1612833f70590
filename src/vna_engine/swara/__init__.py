"""Split swara tokens into alignment units."""

from vna_engine.swara.units import melodic_units, split_token_gati

__all__ = ["melodic_units", "split_token_gati"]
