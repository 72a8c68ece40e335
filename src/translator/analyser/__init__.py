from .analyser import Analyser, Fragment, Translation, translate

__all__ = ["Analyser", "Fragment", "Translation", "translate"]
