"""
Fetching module: PubMed search pipeline.

QueryBuilder -> PubMedProvider -> RecordParser, driven by SearchService
through a SearchSession state machine.
Does NOT contain rendering; display formatting lives in presentation.
"""
