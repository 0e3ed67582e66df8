"""Public-accession 16S amplicon re-analysis: SRA download to QIIME 2 OTU table."""

__version__ = "0.3.0"
