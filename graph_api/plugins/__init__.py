from .base import RendererPlugin, GraphComparatorPlugin, RenderView

__all__ = ['RendererPlugin', 'GraphComparatorPlugin', 'RenderView']
