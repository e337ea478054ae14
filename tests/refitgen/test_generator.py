"""Integration tests for the stub generation pass."""

import pytest

from refitgen.errors import StructuralMismatchError
from refitgen.generator import InterfaceStubGenerator
from refitgen.models import TemplateInformation

PETS_SOURCE = """
    using System;
    using Newtonsoft.Json;
    using Refit;

    namespace Petstore
    {
        public interface IPets
        {
            [Get("/pets/{id}")]
            Task<Pet> GetPet(int id);

            Task<Pet> PostPet(Pet pet);
        }
    }
"""

REPO_SOURCE = """
    using Refit;

    namespace Data
    {
        public interface IRepo<T> where T : class
        {
            [Get("/items/{id}")]
            Task<T> Get(int id, string tag);
        }
    }
"""


class RecordingSynthesizer:
    """Synthesizer that records the model it receives."""

    def __init__(self) -> None:
        self.received: list[TemplateInformation] = []

    @property
    def name(self) -> str:
        return "recording"

    def synthesize(self, info: TemplateInformation) -> str:
        self.received.append(info)
        return "// recorded"


class FailingSynthesizer:
    """Synthesizer that always fails."""

    @property
    def name(self) -> str:
        return "failing"

    def synthesize(self, info: TemplateInformation) -> str:
        raise RuntimeError("template exploded")


@pytest.mark.integration
class TestGenerateInterfaceStubs:
    """Test the full discovery, extraction, validation and rendering pass."""

    def test_renders_stub_for_refit_interface(self, parse_cs) -> None:
        """Test the generated source for a single interface."""
        generator = InterfaceStubGenerator()

        result = generator.generate_interface_stubs([parse_cs(PETS_SOURCE)])

        source = result.source
        assert "using Newtonsoft.Json;" in source
        assert "using Refit;" in source
        assert source.count("using System;") == 1
        assert "namespace Petstore" in source
        assert "public partial class AutoGeneratedIPets : IPets" in source
        assert "public virtual Task<Pet> GetPet(int id)" in source
        assert "var arguments = new object[] { id };" in source
        assert 'return (Task<Pet>) methodImpls["GetPet"](Client, arguments);' in source
        assert "public virtual Task<Pet> PostPet(Pet pet)" in source
        assert "throw new NotImplementedException(" in source

    def test_reports_diagnostics_alongside_source(self, parse_cs) -> None:
        """Test that warnings are returned and do not block generation."""
        generator = InterfaceStubGenerator()

        result = generator.generate_interface_stubs([parse_cs(PETS_SOURCE)])

        assert [d.descriptor.id for d in result.diagnostics] == ["Refit.Warn.01"]
        assert [c.interface_name for c in result.template_info.classes] == ["IPets"]

    def test_renders_generic_interface(self, parse_cs) -> None:
        """Test that type parameters and constraints reach the output."""
        result = InterfaceStubGenerator().generate_interface_stubs(
            [parse_cs(REPO_SOURCE)]
        )

        source = result.source
        assert "public partial class AutoGeneratedIRepo<T> : IRepo<T>" in source
        assert "where T : class" in source
        assert "var arguments = new object[] { id,tag };" in source
        assert "public virtual Task<T> Get(int id,string tag)" in source

    def test_batch_order_follows_input_order(self, parse_cs) -> None:
        """Test that classes appear in tree order, then document order."""
        trees = [parse_cs(REPO_SOURCE, "Repo.cs"), parse_cs(PETS_SOURCE, "Pets.cs")]

        result = InterfaceStubGenerator().generate_interface_stubs(trees)

        names = [c.interface_name for c in result.template_info.classes]
        assert names == ["IRepo", "IPets"]
        assert result.source.index("AutoGeneratedIRepo") < result.source.index(
            "AutoGeneratedIPets"
        )

    def test_generation_is_deterministic(self, parse_cs) -> None:
        """Test that the same input always produces the same output."""
        trees = [parse_cs(PETS_SOURCE), parse_cs(REPO_SOURCE)]
        generator = InterfaceStubGenerator()

        first = generator.generate_interface_stubs(trees)
        second = generator.generate_interface_stubs(trees)

        assert first.source == second.source
        assert first.template_info == second.template_info
        assert first.diagnostics == second.diagnostics

    def test_empty_batch_renders_preamble_only(self, parse_cs) -> None:
        """Test that files without candidates still yield the fixed preamble."""
        tree = parse_cs("namespace Api { public interface IPlain { void Run(); } }")

        result = InterfaceStubGenerator().generate_interface_stubs([tree])

        assert result.template_info == TemplateInformation()
        assert result.diagnostics == ()
        assert "class PreserveAttribute" in result.source
        assert "AutoGenerated" not in result.source

    def test_structural_mismatch_aborts_batch(self, parse_cs) -> None:
        """Test that one malformed candidate fails the whole pass."""
        global_interface = parse_cs(
            'using Refit;\npublic interface IGlobal { [Get("/")] Task Root(); }'
        )

        with pytest.raises(StructuralMismatchError):
            InterfaceStubGenerator().generate_interface_stubs(
                [parse_cs(PETS_SOURCE), global_interface]
            )

    def test_uses_injected_synthesizer(self, parse_cs) -> None:
        """Test that the synthesizer receives the batch model."""
        synthesizer = RecordingSynthesizer()
        generator = InterfaceStubGenerator(synthesizer=synthesizer)

        result = generator.generate_interface_stubs([parse_cs(PETS_SOURCE)])

        assert result.source == "// recorded"
        assert synthesizer.received == [result.template_info]

    def test_synthesizer_errors_propagate(self, parse_cs) -> None:
        """Test that synthesizer failures are not swallowed."""
        generator = InterfaceStubGenerator(synthesizer=FailingSynthesizer())

        with pytest.raises(RuntimeError, match="template exploded"):
            generator.generate_interface_stubs([parse_cs(PETS_SOURCE)])


class TestInterfaceStubGeneratorSteps:
    """Test the individually exposed generation steps."""

    def test_steps_compose_to_template_info(self, parse_cs) -> None:
        """Test find, class info and template info steps directly."""
        generator = InterfaceStubGenerator()
        tree = parse_cs(PETS_SOURCE)

        candidates = generator.find_interfaces_to_generate(tree)
        class_info = generator.generate_class_info(candidates[0])
        template_info = generator.generate_template_info(candidates)

        assert template_info.classes == [class_info]
        assert [u.item for u in template_info.usings] == ["Newtonsoft.Json", "Refit"]
        assert len(generator.generate_warnings(candidates)) == 1

    def test_default_config(self) -> None:
        """Test that the Refit convention is used when none is given."""
        assert InterfaceStubGenerator().config.guard_namespace == "Refit"
