__version__ = "0.1.0"
__title__ = "zkcred"
__author__ = "zkcred contributors"
__email__ = "zkcred@users.noreply.github.com"
__url__ = "https://github.com/zkcred/zkcred"
__license__ = "MIT"
__description__ = "Zero-knowledge credential building blocks: safe primes, Pedersen commitments, Schnorr proofs and CL signatures."
__copyright__ = "2026, zkcred contributors"


from zkcred.primitives.pedersen import Commitment, Opening, commit
from zkcred.primitives.schnorr import SchnorrProver, SchnorrVerifier
from zkcred.primitives.relation import AffineRelation
from zkcred.primitives.clsig import CLKeypair, CLSignature
from zkcred.utils import make_generators
