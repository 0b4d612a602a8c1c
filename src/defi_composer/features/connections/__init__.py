"""
Connections feature: connection entity and the resolver that decides which
ports may be wired together.
"""
