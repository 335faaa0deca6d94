from cons_graph import access as _access
from cons_graph import construct as _construct
from cons_graph import facade as _facade
from cons_graph import printer as _printer
from cons_graph import traverse as _traverse
from cons_graph.access import *
from cons_graph.construct import *
from cons_graph.facade import *
from cons_graph.printer import *
from cons_graph.traverse import *

__all__ = []
__all__ += _construct.__all__
__all__ += _access.__all__
__all__ += _traverse.__all__
__all__ += _printer.__all__
__all__ += _facade.__all__
