"""Known-good inputs and outputs shared across the test modules."""

# Hardhat/Anvil development account #0.
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_MNEMONIC = "test test test test test test test test test test test junk"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# First contracts deployed by the development account on a fresh chain.
DEV_CREATE_ADDRESSES = {
    0: "0x5FbDB2315678afecb367f032d93F642f64180aa3",
    1: "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512",
}

PROXY_BYTECODE = (
    "604580600e600039806000f350fe7fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffe0"
    "3601600081602082378035828234f58015156039578182fd5b8082525050506014600cf3"
)
