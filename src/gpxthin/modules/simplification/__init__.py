from .rdp import RDPSimplifier, trim_degenerate_endpoints
