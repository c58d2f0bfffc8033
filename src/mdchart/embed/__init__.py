from mdchart.embed.markdown import embed_charts

__all__ = ["embed_charts"]
