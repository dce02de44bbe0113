import pytest
from rdkit import Chem

from adapters.rdkit_inchi import RDKitInChIAdapter
from rinchi.encoder import encode
from rinchi.errors import AdapterFailure, UnexpectedIdentifierFormat
from rinchi.reaction import Reaction


def test_identify_smiles_and_mol():
    adapter = RDKitInChIAdapter()
    assert adapter.identify("CCO") == "InChI=1S/C2H6O/c1-2-3/h3H,2H2,1H3"
    assert adapter.identify(Chem.MolFromSmiles("O")) == "InChI=1S/H2O/h1H2"


def test_unparseable_smiles_is_an_adapter_failure():
    adapter = RDKitInChIAdapter()
    with pytest.raises(AdapterFailure):
        adapter.identify("C1CC")
    with pytest.raises(AdapterFailure):
        adapter.identify("")
    with pytest.raises(AdapterFailure):
        adapter.identify(42)


def test_encode_ethanol_oxidation():
    reaction = Reaction.from_smiles("OCC>>CC=O")
    assert encode(reaction, RDKitInChIAdapter()) == (
        "RInChI=1.00.1S/C2H4O/c1-2-3/h2H,1H3<>C2H6O/c1-2-3/h3H,2H2,1H3<>\n"
    )


def test_non_standard_inchi_is_rejected():
    # fixed-H layer requests a non-standard InChI ("InChI=1/")
    adapter = RDKitInChIAdapter(options="/FixedH")
    with pytest.raises(UnexpectedIdentifierFormat):
        encode(Reaction(reactants=["CCO"]), adapter)
