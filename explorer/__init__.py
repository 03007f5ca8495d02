"""Drug Development Research Explorer: PubMed search for drug-development papers."""
