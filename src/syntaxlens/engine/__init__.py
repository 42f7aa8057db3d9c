"""
Render engine façade
"""

from .driver import RenderDriver, RenderOptions, SyntaxResponse, SyntaxParser, default_parser, render

__all__ = ['RenderDriver', 'RenderOptions', 'SyntaxResponse', 'SyntaxParser', 'default_parser', 'render']
