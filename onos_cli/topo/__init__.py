"""Topology objects, query filters, JSON loading and the topology command line."""