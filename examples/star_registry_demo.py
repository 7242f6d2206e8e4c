# examples/star_registry_demo.py
# Run with: poetry run python examples/star_registry_demo.py
#
# Walks through the ownership-proof flow: a wallet asks for a challenge,
# signs it, and registers a star. Then someone rewrites history.

from starledger import Blockchain, AgentKeyPair, ChallengeExpired, VerificationFailed


def register(chain: Blockchain, wallet: AgentKeyPair, star: dict):
    identity = wallet.public_key_b64url()
    message = chain.request_ownership_challenge(identity)
    # The signing step normally happens in the owner's wallet
    signature = wallet.sign(message)
    return chain.submit_proof(identity, message, signature, star)


def main():
    chain = Blockchain()
    alice = AgentKeyPair.generate()
    bob = AgentKeyPair.generate()

    register(chain, alice, {"ra": "18h 36m 56s", "dec": "+38° 47′ 01″", "story": "Vega"})
    register(chain, bob, {"ra": "20h 41m 25s", "dec": "+45° 16′ 49″", "story": "Deneb"})
    register(chain, alice, {"ra": "19h 50m 47s", "dec": "+08° 52′ 06″", "story": "Altair"})

    print(f"Chain height: {chain.get_chain_height()}")
    for star in chain.get_payloads_by_identity(alice.public_key_b64url()):
        print(f"  alice owns {star['story']}")

    # Bob tries to reuse alice's challenge with his own key
    message = chain.request_ownership_challenge(alice.public_key_b64url())
    try:
        chain.submit_proof(alice.public_key_b64url(), message, bob.sign(message), {"story": "Polaris"})
    except VerificationFailed as e:
        print(f"Rejected: {e}")

    # A challenge from an hour ago
    stale = f"{alice.public_key_b64url()}:{chain.clock() - 3600}:starRegistry"
    try:
        chain.submit_proof(alice.public_key_b64url(), stale, alice.sign(stale), {"story": "Sirius"})
    except ChallengeExpired as e:
        print(f"Rejected: {e}")

    print("Valid before tampering:", chain.validate_chain() == [])
    block = chain.get_block_by_height(2)
    block.body = block.body.replace("44656e6562", "5269676c")  # "Deneb" → "Rigl"
    for error in chain.validate_chain():
        print(f"  {error}")


if __name__ == "__main__":
    main()
