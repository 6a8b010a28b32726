from .version import __version__
from .tags import Category, SemanticTag, SyntaxTag, TenseFrame, TenseTime
from .tree import CyclicAttachmentError, Node, TreeArena, TreeError, new_tree
from .syntax import SyntaxNode, parse_syntax
from .lexicon import Lexicon
from .morphology import Agreement, EnglishMorphology
from .names import NameLists
from .transducer import StructureTransducer, split_phrases
from .renderer import SentenceRenderer
from .context import DiscourseContext
from .memory import StatementMemory, structure_score
from .session import ConversationSession, SessionConfig, load_session_config

__all__ = [
    '__version__',
    # Tags
    'Category',
    'SemanticTag',
    'SyntaxTag',
    'TenseFrame',
    'TenseTime',
    # Trees
    'CyclicAttachmentError',
    'Node',
    'TreeArena',
    'TreeError',
    'new_tree',
    'SyntaxNode',
    'parse_syntax',
    # Language resources
    'Lexicon',
    'Agreement',
    'EnglishMorphology',
    'NameLists',
    # Core
    'StructureTransducer',
    'split_phrases',
    'SentenceRenderer',
    'DiscourseContext',
    'StatementMemory',
    'structure_score',
    # Session
    'ConversationSession',
    'SessionConfig',
    'load_session_config',
]
