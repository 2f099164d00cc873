"""NPC class generator

Produces a ``public sealed class X : NPC`` whose ``ConfigurePrefab`` holds a
single fluent chain:

    builder.WithIdentity(...)
        .WithAppearanceDefaults(...)
        [.WithSpawnPosition(...)]
        [.EnsureCustomer().WithCustomerDefaults(...)]
        [.EnsureDealer().WithDealerDefaults(...)]
        [.WithRelationshipDefaults(...)]
        [.WithSchedule(...)]
        [.WithInventoryDefaults(...)]
        ;

Bracketed sections are gated on blueprint state so unconfigured features
produce no code.
"""

from typing import Optional

from questsmith.core.blueprint.models import (
    CustomerDefaults,
    DealerDefaults,
    InventoryDefaults,
    NpcBlueprint,
    RelationshipDefaults,
)
from questsmith.core.codegen import appearance, header, schedule
from questsmith.core.codegen.code_builder import CodeBuilder
from questsmith.core.codegen.formatting import (
    bool_literal,
    escape_string,
    float_literal,
    format_vector3,
    string_literal,
)
from questsmith.core.codegen.identifiers import (
    IdentifierStyle,
    make_identifier,
    normalize_namespace,
)
from questsmith.core.codegen.options import GeneratorOptions
from questsmith.core.codegen.usings import UsingsBuilder
from questsmith.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CLASS_NAME = "GeneratedNpc"


def npc_class_name(npc: NpcBlueprint) -> str:
    return make_identifier(npc.class_name, DEFAULT_CLASS_NAME, IdentifierStyle.PASCAL)


def generate_npc(npc: NpcBlueprint, options: Optional[GeneratorOptions] = None) -> str:
    """Generate the C# source for one NPC blueprint."""
    if npc is None:
        raise TypeError("Blueprint cannot be null")
    options = options or GeneratorOptions()

    builder = CodeBuilder(options.indent_size, options.emit_source_comments)
    class_name = npc_class_name(npc)
    namespace = normalize_namespace(npc.namespace, options.default_npc_namespace)

    header.emit(
        builder,
        "NPC",
        npc.mod_name,
        npc.mod_version,
        npc.mod_author,
        npc.game_developer,
        npc.game_name,
    )
    UsingsBuilder().add_npc_usings().emit(builder)

    builder.open_block(f"namespace {namespace}")
    _emit_class(builder, npc, class_name)
    builder.close_block()

    logger.debug("Generated NPC class %s.%s", namespace, class_name)
    return builder.build()


def _emit_class(builder: CodeBuilder, npc: NpcBlueprint, class_name: str) -> None:
    builder.append_source_comment("Npc.DisplayName, Npc.NpcId")
    builder.append_doc_comment(
        f'Auto-generated NPC blueprint for "{escape_string(npc.display_name)}".',
        "Customize ConfigurePrefab and OnCreated to add unique logic.",
    )
    builder.open_block(f"public sealed class {class_name} : NPC")

    builder.append_source_comment("Npc.IsPhysical")
    builder.append_line(
        f"public override bool IsPhysical => {bool_literal(npc.is_physical)};"
    )
    if npc.is_dealer:
        builder.append_source_comment("Npc.IsDealer = true")
        builder.append_line("public override bool IsDealer => true;")
    builder.append_line()

    _emit_configure_prefab(builder, npc)

    builder.append_line(f"public {class_name}() : base()")
    builder.open_block()
    builder.close_block()
    builder.append_line()

    builder.open_block("protected override void OnCreated()")
    builder.append_line("base.OnCreated();")
    builder.append_line("Appearance.Build();")
    builder.append_line("Schedule.Enable();")
    builder.close_block()

    builder.close_block()


def _emit_configure_prefab(builder: CodeBuilder, npc: NpcBlueprint) -> None:
    builder.append_source_comment(
        "Npc identity, appearance, spawn, customer, dealer, relationships, "
        "schedule and inventory"
    )
    builder.open_block("protected override void ConfigurePrefab(NPCPrefabBuilder builder)")

    builder.append_source_comment("Npc.NpcId, Npc.FirstName, Npc.LastName")
    builder.append_line(
        f"builder.WithIdentity({string_literal(npc.npc_id)}, "
        f"{string_literal(npc.first_name)}, {string_literal(npc.last_name)})"
    )

    appearance.emit(builder, npc.appearance)

    if npc.has_spawn_position:
        builder.append_source_comment("Npc.HasSpawnPosition, Npc.SpawnX/Y/Z")
        builder.append_line(
            f".WithSpawnPosition({format_vector3(npc.spawn_x, npc.spawn_y, npc.spawn_z)})"
        )

    if npc.enable_customer:
        builder.append_source_comment("Npc.EnableCustomer = true")
        builder.append_line(".EnsureCustomer()")
        _emit_customer_defaults(builder, npc.customer_defaults)

    if npc.is_dealer:
        builder.append_source_comment("Npc.IsDealer = true")
        builder.append_line(".EnsureDealer()")
        _emit_dealer_defaults(builder, npc.dealer_defaults)

    if npc.relationship_defaults.is_configured:
        _emit_relationship_defaults(builder, npc.relationship_defaults)

    schedule.emit(builder, npc)

    if npc.inventory_defaults.is_configured:
        _emit_inventory_defaults(builder, npc.inventory_defaults)

    builder.append_line(";")
    builder.close_block()
    builder.append_line()


def _enum_member(value: str, fallback: str) -> str:
    return make_identifier(value, fallback)


# === Prefab sections ===


def _emit_customer_defaults(builder: CodeBuilder, cd: CustomerDefaults) -> None:
    builder.append_source_comment("Npc.CustomerDefaults")
    builder.open_block(".WithCustomerDefaults(cd =>")
    builder.append_line(
        f"cd.WithSpending({float_literal(cd.min_weekly_spending)}, "
        f"{float_literal(cd.max_weekly_spending)})"
    )
    builder.append_line(
        f"  .WithOrdersPerWeek({cd.min_orders_per_week}, {cd.max_orders_per_week})"
    )
    if cd.preferred_order_day.strip():
        day = _enum_member(cd.preferred_order_day, "Monday")
        builder.append_line(f"  .WithPreferredOrderDay(Day.{day})")
    builder.append_line(f"  .WithOrderTime({cd.order_time})")
    if cd.customer_standards.strip():
        standard = _enum_member(cd.customer_standards, "Moderate")
        builder.append_line(f"  .WithStandards(CustomerStandard.{standard})")
    builder.append_line(f"  .AllowDirectApproach({bool_literal(cd.allow_direct_approach)})")

    if cd.guarantee_first_sample:
        builder.append_line("  .GuaranteeFirstSample(true)")
    if cd.mutual_relation_min_at_50 != 0 or cd.mutual_relation_max_at_100 != 0:
        builder.append_line(
            "  .WithMutualRelationRequirement("
            f"minAt50: {float_literal(cd.mutual_relation_min_at_50)}, "
            f"maxAt100: {float_literal(cd.mutual_relation_max_at_100)})"
        )
    if cd.call_police_chance > 0:
        builder.append_line(
            f"  .WithCallPoliceChance({float_literal(cd.call_police_chance)})"
        )
    if cd.base_addiction > 0 or cd.dependence_multiplier != 1.0:
        builder.append_line(
            "  .WithDependence("
            f"baseAddiction: {float_literal(cd.base_addiction)}, "
            f"dependenceMultiplier: {float_literal(cd.dependence_multiplier)})"
        )

    if cd.drug_affinities:
        builder.append_source_comment("CustomerDefaults.DrugAffinities[]")
        builder.append_line("  .WithAffinities(new[]")
        builder.append_line("  {")
        last = len(cd.drug_affinities) - 1
        for index, affinity in enumerate(cd.drug_affinities):
            drug = _enum_member(affinity.drug_type, "Marijuana")
            comma = "," if index < last else ""
            builder.append_line(
                f"      (DrugType.{drug}, {float_literal(affinity.affinity_value)}){comma}"
            )
        builder.append_line("  })")

    if cd.preferred_properties:
        properties = ", ".join(
            f"Property.{_enum_member(p, 'Property')}" for p in cd.preferred_properties
        )
        builder.append_line(f"  .WithPreferredProperties({properties})")

    builder.append_line(";")
    builder.close_block()
    builder.append_line(")")


def _emit_dealer_defaults(builder: CodeBuilder, dd: DealerDefaults) -> None:
    builder.append_source_comment("Npc.DealerDefaults")
    builder.open_block(".WithDealerDefaults(dd =>")
    builder.append_line(f"dd.WithSigningFee({float_literal(dd.signing_fee)})")
    builder.append_line(f"  .WithCut({float_literal(dd.commission_cut)})")
    builder.append_line(
        f"  .WithDealerType(DealerType.{_enum_member(dd.dealer_type, 'PlayerDealer')})"
    )
    if dd.home_name.strip():
        builder.append_line(f"  .WithHomeName({string_literal(dd.home_name)})")
    if dd.allow_insufficient_quality:
        builder.append_line("  .AllowInsufficientQuality(true)")
    if not dd.allow_excess_quality:
        builder.append_line("  .AllowExcessQuality(false)")
    if dd.completed_deals_variable.strip():
        builder.append_line(
            f"  .WithCompletedDealsVariable({string_literal(dd.completed_deals_variable)})"
        )
    builder.append_line(";")
    builder.close_block()
    builder.append_line(")")


def _emit_relationship_defaults(builder: CodeBuilder, rd: RelationshipDefaults) -> None:
    builder.append_source_comment("Npc.RelationshipDefaults")
    builder.open_block(".WithRelationshipDefaults(r =>")
    builder.append_line(f"r.WithDelta({float_literal(rd.starting_delta)})")
    builder.append_line(f"  .SetUnlocked({bool_literal(rd.starts_unlocked)})")
    if rd.unlock_type.strip():
        unlock = _enum_member(rd.unlock_type, "DirectApproach")
        builder.append_line(f"  .SetUnlockType(NPCRelationship.UnlockType.{unlock})")
    if rd.connections:
        connections = ", ".join(string_literal(c) for c in rd.connections)
        builder.append_line(f"  .WithConnectionsById({connections})")
    builder.append_line(";")
    builder.close_block()
    builder.append_line(")")


def _emit_inventory_defaults(builder: CodeBuilder, inv: InventoryDefaults) -> None:
    builder.append_source_comment("Npc.InventoryDefaults")
    builder.open_block(".WithInventoryDefaults(inv =>")
    if inv.startup_items:
        items = ", ".join(string_literal(i) for i in inv.startup_items)
        builder.append_line(f"inv.WithStartupItems({items})")
    else:
        builder.append_line("inv")
    if inv.enable_random_cash:
        builder.append_line(
            f"  .WithRandomCash(min: {inv.random_cash_min}, max: {inv.random_cash_max})"
        )
    if not inv.clear_inventory_each_night:
        builder.append_line("  .WithClearInventoryEachNight(false)")
    builder.append_line(";")
    builder.close_block()
    builder.append_line(")")
