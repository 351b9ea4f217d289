from lazysmt.cnf.cnf_types import CnfDocument
from lazysmt.cnf.encoder import Encoding, EncodingTable, encode, encode_clause, decode

__all__ = [
    "CnfDocument",
    "Encoding", "EncodingTable", "encode", "encode_clause", "decode",
]
