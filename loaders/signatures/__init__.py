from loaders.signatures.four_byte_signature_lookup import FourByteSignatureLookup
from loaders.signatures.multi_signature_lookup import MultiSignatureLookup
from loaders.signatures.openchain_signature_lookup import OpenChainSignatureLookup, SamczunSignatureLookup
from loaders.signatures.signature_lookup import SignatureLookup
