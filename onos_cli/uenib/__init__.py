"""UE information commands and their command line."""