# srtlv

Decoders for the Segment Routing structures carried in BGP and BGP-LS
messages: SRv6 sub-TLVs, SRv6 End.X SID and L3 Service TLVs, the SR Policy
NLRI (SAFI 73) and tunnel encapsulation attribute, and BGP-LS TE Policy
descriptors. Each decoder takes the raw bytes of one structure and returns
a dataclass. Malformed or truncated input raises `ValueError`.

## Installation

```
pip install srtlv
```

The package has no runtime dependencies.

## Modules

| Module | Contents |
| --- | --- |
| `srtlv.srv6_subtlv` | `SIDStructure`, `UnknownSRv6SubTLV`; `unmarshal_sid_structure`, `unmarshal_subtlv`, `unmarshal_all_subtlvs`, `sid_structure_from_json`, `subtlvs_from_json` |
| `srtlv.srv6_endx` | `EndXSIDFlags`, `EndXSIDTLV`; `unmarshal_endx_sid_flags`, `unmarshal_endx_sid_tlv`, `endx_sid_tlv_from_json` |
| `srtlv.srv6_tlvs` | `BGPPeerNodeFlags`, `BGPPeerNodeSID`, `CapabilityTLV`, `EndpointBehavior` and their `unmarshal_*` functions |
| `srtlv.srv6_service` | `L3Service`, `InformationSubTLV`, `SIDStructureSubSubTLV`, `L2Service`; `unmarshal_l3_service`, `unmarshal_l3_service_subtlvs`, `unmarshal_l3_service_subsubtlvs`, `unmarshal_information_subtlv`, `unmarshal_sid_structure_subsub_tlv`, `l3_service_from_json`, `information_subtlv_from_json` |
| `srtlv.srpolicy_nlri` | `NLRI73`; `unmarshal_nlri73` |
| `srtlv.srpolicy_bsid` | `BSIDType`, `NoBSID`, `LabelBSID`, `SRv6BSID`, `BindingSID`; `unmarshal_bsid_stlv`, `binding_sid_from_json` |
| `srtlv.srpolicy_subtlv` | `Preference`, `Weight`, `ENLP`; `unmarshal_preference_stlv`, `weight_from_json` |
| `srtlv.srpolicy_segment` | `SegmentType`, `SegmentFlags`, `TypeASegment`, `SegmentList`; `new_segment_flags`, `unmarshal_type_a_segment`, `unmarshal_segment_list_stlv`, `segment_flags_from_json`, `segment_list_from_json` |
| `srtlv.srpolicy_tlv` | `SRPolicyTLV`; `unmarshal_sr_policy_tlv` |
| `srtlv.te_descriptor` | `TLV`, `PolicyDescriptor`; `unmarshal_policy_descriptor` |
| `srtlv.te_tlvs` | `ProtocolOriginType`, `PolicyCandidatePathDescriptor`, `LocalMPLSCrossConnect`, `LocalMPLSCrossConnectFEC`, `LocalMPLSCrossConnectInterface` and their `unmarshal_*` functions |

## Examples

Decode an SR Policy NLRI:

```python
from srtlv.srpolicy_nlri import unmarshal_nlri73

nlri = unmarshal_nlri73(bytes([
    0x60, 0x00, 0x00, 0x00, 0x02, 0x00, 0x00, 0x00, 0x63, 0x0A, 0x00, 0x00, 0x0D,
]))
print(nlri.length, nlri.distinguisher, nlri.color)  # 12 2 99
```

`length` is given in bytes, not bits.

Decode an SRv6 End.X SID TLV with its SID Structure sub-TLV:

```python
from srtlv.srv6_endx import unmarshal_endx_sid_tlv

tlv = unmarshal_endx_sid_tlv(bytes([
    0x00, 0x06, 0x00, 0x80, 0x00, 0x00,
    0x20, 0x01, 0x04, 0x20, 0xFF, 0xFF, 0x10, 0x77,
    0x00, 0x40, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x04, 0xE4, 0x00, 0x04, 0x28, 0x18, 0x10, 0x00,
]))
print(tlv.sid)  # 2001:420:ffff:1077:40::
print(tlv.sub_tlvs[0].lb_length)  # 40
```

Decode the SR Policy tunnel attribute and walk its segment lists:

```python
from srtlv.srpolicy_tlv import unmarshal_sr_policy_tlv

raw_attribute = bytes([
    0x00, 0x0F, 0x00, 0x48,
    0x0C, 0x06, 0x00, 0x00, 0x00, 0x00, 0x00, 0x44,
    0x0D, 0x06, 0x00, 0x00, 0xDB, 0xBA, 0x00, 0x00,
    0x80, 0x00, 0x19, 0x00,
    0x09, 0x06, 0x00, 0x00, 0x00, 0x00, 0x00, 0x01,
    0x01, 0x06, 0x00, 0x00, 0x18, 0x6A, 0xA0, 0x00,
    0x01, 0x06, 0x00, 0x00, 0x05, 0xDC, 0x10, 0x00,
    0x80, 0x00, 0x19, 0x00,
    0x09, 0x06, 0x00, 0x00, 0x00, 0x00, 0x00, 0x03,
    0x01, 0x06, 0x00, 0x00, 0x18, 0x6A, 0xA0, 0x00,
    0x01, 0x06, 0x00, 0x00, 0x05, 0xDC, 0xD0, 0x00,
])
policy = unmarshal_sr_policy_tlv(raw_attribute)
print(policy.preference.preference)  # 68
print(policy.binding_sid.bsid.bsid)  # 900000
for segment_list in policy.segment_list:
    print(segment_list.weight.weight, [s.label for s in segment_list.segments])
# 1 [100010, 24001]
# 3 [100010, 24013]
```

An empty attribute, as sent with MP_UNREACH, decodes to `None`. Segment
types other than Type A are recognised inside a segment list but skipped;
unknown SR Policy sub-TLVs are logged and skipped.

Read the TE Policy descriptor TLVs:

```python
from srtlv.te_descriptor import unmarshal_policy_descriptor

desc = unmarshal_policy_descriptor(bytes([0x02, 0x26, 0x00, 0x02, 0x00, 0x07]))
print(desc.all_tlv_ids(), desc.tunnel_id())  # [550] 7
```

## JSON forms

Some objects can be turned into, or built from, JSON-ready dictionaries:

- `BindingSID.to_json()` and `binding_sid_from_json()`; the individual
  `NoBSID`, `LabelBSID` and `SRv6BSID` objects also have `to_json()`.
- `SegmentList.to_json()` and `segment_list_from_json()`;
  `TypeASegment.to_json()`, `segment_flags_from_json()` and
  `weight_from_json()`.
- `endx_sid_tlv_from_json()`, `subtlvs_from_json()` and
  `sid_structure_from_json()` build SRv6 objects from parsed JSON.
- `l3_service_from_json()` and `information_subtlv_from_json()` build the
  L3 Service objects.
- `LocalMPLSCrossConnectFEC.to_json()` and
  `LocalMPLSCrossConnectInterface.to_json()` produce JSON only.

Byte strings appear in JSON as base64 text.

## What this package does not do

It only decodes individual structures from bytes already extracted from a
message. It does not open BMP or BGP sessions, parse whole BGP UPDATE or
BMP messages, decode BGP-LS node descriptors or unicast NLRI, or publish
results anywhere. It has no command-line tool and does not encode
structures back to wire format.

## Running the tests

```
pip install "srtlv[test]"
pytest
```