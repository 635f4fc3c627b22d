"""PCI conflict and cell queries and their command line."""